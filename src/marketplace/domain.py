"""Domain initialization and configuration for the ReNew marketplace."""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
