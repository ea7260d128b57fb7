"""Logging infrastructure with budget context."""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOGGER_NAME = "ynabctl"


class BudgetContextFilter(logging.Filter):
    """Add budget context to log records."""
    
    def __init__(self):
        super().__init__()
        self.budget_id: Optional[str] = None
    
    def filter(self, record):
        """Add budget_id to record."""
        record.budget_id = self.budget_id or "-"
        return True


class YnabctlLogger:
    """Centralized logging manager."""
    
    def __init__(self, log_dir: Optional[Path] = None, verbose: bool = False):
        self.budget_filter = BudgetContextFilter()
        
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        
        # Remove existing handlers
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
        
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [budget:%(budget_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        
        # stdout carries command output, so the console handler writes to stderr
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.budget_filter)
        self.logger.addHandler(console_handler)
        
        self.log_file: Optional[Path] = None
        if log_dir is not None:
            try:
                log_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                self.logger.warning(f"File logging disabled, cannot create {log_dir}: {e}")
                return
            
            self.log_file = log_dir / "ynabctl.log"
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=1024 * 1024,  # 1MB
                backupCount=3,
                encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.budget_filter)
            self.logger.addHandler(file_handler)
    
    def set_budget_context(self, budget_id: Optional[str]):
        """Set current budget context for logging."""
        self.budget_filter.budget_id = budget_id
    
    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[YnabctlLogger] = None


def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False) -> logging.Logger:
    """(Re)configure the global logger; called once per invocation."""
    global _logger_instance
    _logger_instance = YnabctlLogger(log_dir, verbose)
    return _logger_instance.get_logger()


def get_logger() -> logging.Logger:
    """Get the ynabctl logger, configured or not."""
    if _logger_instance is None:
        return logging.getLogger(LOGGER_NAME)
    return _logger_instance.get_logger()


def set_budget_context(budget_id: Optional[str]):
    """Set budget context for logging."""
    if _logger_instance:
        _logger_instance.set_budget_context(budget_id)
