from logfacade.logging import Severity, configure_logging, get_logger

__all__ = ["Severity", "configure_logging", "get_logger"]
