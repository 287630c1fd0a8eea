from enum import Enum


class AccessLevel(Enum):
    """
    What a principal must hold before an action is allowed.

    AUTHENTICATED: any resolved account
    READ: target reachable from the principal's organization, or shared with it
    WRITE: READ plus editor of the target's owning organization
    SUPERUSER: superusers only
    """

    AUTHENTICATED = "authenticated"
    READ = "read"
    WRITE = "write"
    SUPERUSER = "superuser"


class Action(str, Enum):
    """
    One action per route. Values match the action names the frontend uses.
    """

    # Users
    FETCH_USER_PROFILE = "fetchUserProfile"

    # Organizations
    FETCH_ORGANIZATIONS = "fetchOrganizations"
    FETCH_ORGANIZATION = "fetchOrganization"
    CREATE_ORGANIZATION = "createOrganization"

    # Indicators
    FETCH_INDICATORS = "fetchIndicators"
    FETCH_INDICATOR = "fetchIndicator"
    CREATE_INDICATOR = "createIndicator"
    UPDATE_INDICATOR = "updateIndicator"
    DELETE_INDICATOR = "deleteIndicator"

    # Outcomes
    FETCH_OUTCOMES = "fetchOutcomes"
    FETCH_OUTCOME = "fetchOutcome"

    # Impact models
    FETCH_IMPACT_MODELS = "fetchImpactModels"
    FETCH_IMPACT_MODEL_INTERFACES = "fetchImpactModelInterfaces"

    # Themes
    FETCH_THEMES = "fetchThemes"


ACTION_POLICIES: dict[Action, AccessLevel] = {
    Action.FETCH_USER_PROFILE: AccessLevel.AUTHENTICATED,
    Action.FETCH_ORGANIZATIONS: AccessLevel.READ,
    Action.FETCH_ORGANIZATION: AccessLevel.READ,
    Action.CREATE_ORGANIZATION: AccessLevel.SUPERUSER,
    Action.FETCH_INDICATORS: AccessLevel.READ,
    Action.FETCH_INDICATOR: AccessLevel.READ,
    Action.CREATE_INDICATOR: AccessLevel.WRITE,
    Action.UPDATE_INDICATOR: AccessLevel.WRITE,
    Action.DELETE_INDICATOR: AccessLevel.WRITE,
    Action.FETCH_OUTCOMES: AccessLevel.READ,
    Action.FETCH_OUTCOME: AccessLevel.READ,
    Action.FETCH_IMPACT_MODELS: AccessLevel.READ,
    Action.FETCH_IMPACT_MODEL_INTERFACES: AccessLevel.READ,
    # Themes are a shared vocabulary, not owned by any organization
    Action.FETCH_THEMES: AccessLevel.AUTHENTICATED,
}
