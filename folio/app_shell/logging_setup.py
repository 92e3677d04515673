import logging

from folio.config.models import LoggingSettings


def configure_logging(settings: LoggingSettings | None = None) -> None:
    settings = settings or LoggingSettings()
    logging.basicConfig(
        level=getattr(logging, settings.level),
        format=settings.format,
    )
