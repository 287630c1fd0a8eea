"""Impact Tracker API: impact measurement data with organization-scoped access."""
