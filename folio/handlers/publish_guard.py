"""
Publish guard handler.

Guards:
- G1: every required data key for the item's type must be present and
  non-blank before a version is published

Unpublishing is never blocked. The guard raises from the publishing stage:
for publish() the flag flip that would follow does not happen, while
create() has already stored its first version as published by then.
"""

from __future__ import annotations

from folio.components.content import (
    ContentHandler,
    ContentValidationError,
    PublishContentContext,
    PublishGuardError,
)
from folio.config.models import PublishGuardSettings


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class RequiredFieldsPublishGuard(ContentHandler):
    def __init__(self, settings: PublishGuardSettings) -> None:
        self._settings = settings

    def publishing(self, context: PublishContentContext) -> None:
        if not self._settings.enabled or context.is_unpublish:
            return

        required = self._settings.required_fields.get(context.content_type, [])
        version_record = context.publishing_item_version_record
        data = version_record.data if version_record else {}

        errors = [
            ContentValidationError(
                code=f"{key}_required",
                message=f"'{key}' is required to publish {context.content_type}",
                field=key,
            )
            for key in required
            if _is_blank(data.get(key))
        ]
        if errors:
            raise PublishGuardError(errors)
