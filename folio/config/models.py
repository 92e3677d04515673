from typing import Literal

from pydantic import BaseModel, Field

from folio.domain.definitions import ContentTypeDefinition

CreateOptionsName = Literal["published", "draft"]


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ContentSettings(BaseModel):
    default_create_options: CreateOptionsName = "published"
    content_types: list[ContentTypeDefinition] = Field(default_factory=list)


class AuditSettings(BaseModel):
    enabled: bool = True
    log_reads: bool = False  # Whether to record loads as well as transitions


class PublishGuardSettings(BaseModel):
    enabled: bool = False
    # content type name -> data keys that must be non-blank before publishing
    required_fields: dict[str, list[str]] = Field(default_factory=dict)


class FolioConfig(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)
    publish_guard: PublishGuardSettings = Field(default_factory=PublishGuardSettings)
