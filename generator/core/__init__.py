# Core module exports
from core.config import settings, get_settings, Settings
from core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    unbind_context,
    generate_correlation_id,
    pass_logger,
    ingest_logger,
    cli_logger,
)
