from typing import Dict, List, Optional

from pydantic import BaseModel

from impactapi.core.models import Theme


class ThemeResponse(BaseModel):
    uri: str
    name: str
    description: Optional[str]

    @classmethod
    def from_model(cls, theme: Theme) -> "ThemeResponse":
        return cls(uri=theme.uri, name=theme.name, description=theme.description)


class OutcomeThemeSummary(BaseModel):
    uri: str
    name: str
    theme_uri: Optional[str]


class ThemesResponse(BaseModel):
    themes: List[ThemeResponse]


class OutcomeThemesResponse(BaseModel):
    """Theme of each requested outcome, keyed by outcome URI."""

    themes: Dict[str, Optional[ThemeResponse]]
    outcomes: List[OutcomeThemeSummary]
