"""
Pydantic schemas for the archive configuration document
"""

from typing import Any, List, Optional

from pydantic import ConfigDict, Field

from schemas.base import ConfigModel


class RuntimeConfig(ConfigModel):
    dry_run_mode: bool = Field(False, alias="DryRunMode")


class SourceConfig(ConfigModel):
    """Declared source type plus its adapter-specific raw configuration"""
    type: str = Field("", alias="Type")
    adapter_config: Optional[Any] = Field(None, alias="AdapterConfig")


class DestinationConfig(ConfigModel):
    """Declared destination type plus its adapter-specific raw configuration"""
    type: str = Field("", alias="Type")
    adapter_config: Optional[Any] = Field(None, alias="AdapterConfig")


class AlertConfig(ConfigModel):
    """
    Settings for the alert e-mail channel.

    The archiver core passes this block through untouched; only the alert
    dispatcher reads it. Unknown keys are kept.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    aws_region: str = Field("", alias="AWSRegion")
    aws_access_key_id: str = Field("", alias="AWSAccessKeyID")
    aws_secret_access_key: str = Field("", alias="AWSSecretAccessKey")
    char_set: str = Field("UTF-8", alias="CharSet")
    return_to_addr: str = Field("", alias="ReturnToAddr")
    subject_text: str = Field("rest-archiver alert", alias="SubjectText")
    recipient_emails: List[str] = Field(default_factory=list, alias="RecipientEmails")


class ArchiveSet(ConfigModel):
    """One named unit of work: a source sub-config mapped to a destination sub-config"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str = Field("", alias="Name")
    source: Optional[Any] = Field(None, alias="Source")
    destination: Optional[Any] = Field(None, alias="Destination")


class AppConfig(ConfigModel):
    """Top-level archive configuration document"""

    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig, alias="Runtime")
    source: SourceConfig = Field(default_factory=SourceConfig, alias="Source")
    destination: DestinationConfig = Field(default_factory=DestinationConfig, alias="Destination")
    alert: AlertConfig = Field(default_factory=AlertConfig, alias="Alert")
    sets: List[ArchiveSet] = Field(default_factory=list, alias="Sets")

    def max_set_name_length(self) -> int:
        """Length of the longest set name, used to align log prefixes"""
        return max((len(s.name) for s in self.sets), default=0)


class NullSourceConfig(ConfigModel):
    """Adapter configuration for the Null source: the payload it returns"""
    data: str = Field("", alias="Data")
