"""
Pydantic schemas for the S3 destination adapter
"""

from pydantic import Field

from schemas.base import ConfigModel

DEFAULT_OBJECT_NAME_PREFIX = "data"


class AwsConfig(ConfigModel):
    region: str = Field("", alias="Region")
    access_key_id: str = Field("", alias="AccessKeyId")
    secret_access_key: str = Field("", alias="SecretAccessKey")


class S3Config(ConfigModel):
    """Adapter configuration shared by every set"""
    aws_config: AwsConfig = Field(default_factory=AwsConfig, alias="AwsConfig")
    bucket_name: str = Field("", alias="BucketName")


class S3SetConfig(ConfigModel):
    """Per-set configuration; an empty prefix defaults to ``<set name>/data``"""
    object_name_prefix: str = Field("", alias="ObjectNamePrefix")
