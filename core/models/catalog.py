# =============================================================================
# core/models/catalog.py - Catalog Schemas
# =============================================================================
# These models define the API contract for catalog reads:
# - AppResponse / AppList: apps a user can automate
# - TriggerResponse / TriggerList: events an app can emit
# - ConnectionRequirement: whether a trigger needs stored credentials
#
# An app's auth_type decides whether its triggers need a connection.
# A trigger may override that with its own requires_connection flag.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class AuthType(str, Enum):
    """
    How an app authenticates outbound calls.

    - none: public app, no connection needed
    - api_key / basic / oauth2: user must connect an account first
    """
    NONE = "none"
    API_KEY = "api_key"
    BASIC = "basic"
    OAUTH2 = "oauth2"


class AppResponse(BaseModel):
    """
    Schema for returning an app to clients.

    Example:
        {
            "id": "slack",
            "key": "slack",
            "name": "Slack",
            "description": "Team messaging",
            "logo_url": "https://cdn.example.com/slack.svg",
            "auth_type": "oauth2",
            "requires_connection": true
        }
    """

    id: str = Field(..., description="App identifier")
    key: str = Field(..., description="Stable machine-readable app key")
    name: str = Field(..., min_length=1, description="Display name")
    description: str | None = Field(default=None, description="Short description")
    logo_url: str | None = Field(default=None, description="Logo image URL")
    auth_type: AuthType = Field(default=AuthType.NONE, description="Authentication scheme")

    @computed_field
    @property
    def requires_connection(self) -> bool:
        """True when the app needs stored credentials."""
        return self.auth_type != AuthType.NONE


class AppList(BaseModel):
    """List of apps with count."""
    items: list[AppResponse] = Field(default_factory=list)
    count: int = 0


class TriggerResponse(BaseModel):
    """
    Schema for returning a trigger to clients.

    requires_connection is None when the trigger follows its app's auth_type.
    """

    id: str = Field(..., description="Trigger identifier")
    key: str = Field(..., description="Unique trigger key (e.g. slack.new_message)")
    app_id: str = Field(..., description="Owning app ID")
    name: str = Field(..., min_length=1, description="Display name")
    description: str | None = Field(default=None)
    requires_connection: bool | None = Field(
        default=None,
        description="Per-trigger override of the app's connection requirement"
    )


class TriggerList(BaseModel):
    """Triggers of a single app."""
    app_id: str
    items: list[TriggerResponse] = Field(default_factory=list)
    count: int = 0


class ConnectionRequirement(BaseModel):
    """Answer to 'does this trigger need a connection?'."""
    key: str
    app_id: str
    connection_required: bool
