"""
Pydantic schemas for the REST API source adapter
"""

from pydantic import BaseModel, Field, field_validator

from schemas.base import ConfigModel

DEFAULT_REQUEST_METHOD = "GET"
DEFAULT_BATCH_SIZE = 10
DEFAULT_BATCH_DELAY_SECONDS = 3
DEFAULT_USER_AGENT = "rest-archiver"


class RestAPIConfig(ConfigModel):
    """
    Adapter configuration for the REST source.

    BatchSize and BatchDelaySeconds are parsed and defaulted but reserved:
    the read path does not consult them.
    """

    request_method: str = Field(DEFAULT_REQUEST_METHOD, alias="RequestMethod")
    base_url: str = Field("", alias="BaseURL")
    auth_type: str = Field("", alias="AuthType")
    username: str = Field("", alias="Username")
    password: str = Field("", alias="Password")
    client_id: str = Field("", alias="ClientID")
    client_secret: str = Field("", alias="ClientSecret")
    user_agent: str = Field(DEFAULT_USER_AGENT, alias="UserAgent")
    batch_size: int = Field(DEFAULT_BATCH_SIZE, alias="BatchSize")
    batch_delay_seconds: int = Field(DEFAULT_BATCH_DELAY_SECONDS, alias="BatchDelaySeconds")

    @field_validator("request_method")
    @classmethod
    def default_request_method(cls, v):
        return v.upper() if v else DEFAULT_REQUEST_METHOD

    @field_validator("user_agent")
    @classmethod
    def default_user_agent(cls, v):
        return v or DEFAULT_USER_AGENT

    @field_validator("batch_size")
    @classmethod
    def default_batch_size(cls, v):
        return v if v > 0 else DEFAULT_BATCH_SIZE

    @field_validator("batch_delay_seconds")
    @classmethod
    def default_batch_delay(cls, v):
        return v if v > 0 else DEFAULT_BATCH_DELAY_SECONDS


class RestAPISetConfig(ConfigModel):
    """Per-set configuration: the path appended to BaseURL"""

    path: str = Field("", alias="Path")

    @field_validator("path")
    @classmethod
    def ensure_leading_slash(cls, v):
        """Non-empty paths always start with exactly one '/'"""
        if v:
            v = "/" + v.lstrip("/")
        return v


class SalesforceAuthResponse(BaseModel):
    """Body of a successful Salesforce password-grant token exchange"""
    id: str = ""
    issued_at: str = ""
    instance_url: str = ""
    signature: str = ""
    access_token: str = ""
    token_type: str = ""
