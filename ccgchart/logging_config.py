import logging
import sys
from datetime import datetime


class ProgressLogger:
    """
    Logs conversion progress through the logging system instead of a
    terminal progress bar, so batch runs leave a trace in the log file.

    With total=None (input read from a stream) a line is logged every
    `log_every` trees instead of every 10%.
    """
    def __init__(self, total, desc="Converting", logger=None, log_every=1000):
        self.total = total
        self.current = 0
        self.failed = 0
        self.desc = desc
        self.logger = logger or logging.getLogger(__name__)
        self.log_every = log_every
        self.start_time = datetime.now()
        self.last_log_percent = -1
        self.last_log_count = 0

    def update(self, n=1, failed=0):
        """Advance by n trees, of which `failed` could not be converted."""
        self.current += n
        self.failed += failed

        if self.total is None:
            if self.current - self.last_log_count >= self.log_every:
                self._log(f"{self.desc}: {self.current}")
            return

        percent = int((self.current / self.total) * 100) if self.total > 0 else 0
        # Log every 10% and at the end
        if percent - self.last_log_percent >= 10 or self.current == self.total:
            self._log(f"{self.desc}: {self.current}/{self.total} ({percent}%)")
            self.last_log_percent = percent

    def _log(self, head):
        elapsed = (datetime.now() - self.start_time).total_seconds()
        rate = self.current / elapsed if elapsed > 0 else 0

        msg_parts = [head]
        if self.failed:
            msg_parts.append(f"- {self.failed} failed")
        if rate > 0:
            msg_parts.append(f"[{rate:.0f} trees/s]")

        self.logger.info(" ".join(msg_parts))
        self.last_log_count = self.current

    def close(self):
        """Mark progress as complete."""
        if self.total is None:
            if self.current != self.last_log_count:
                self._log(f"{self.desc}: {self.current} (done)")
        elif self.current < self.total:
            self.current = self.total
            self.update(0)


def setup_logging(log_file=None, level=logging.INFO, debug=False):
    """
    Configure the root logger for a conversion run.

    Args:
        log_file: Optional path of a log file, appended to.
        level: Logging level (default: INFO).
        debug: If True, use DEBUG level and include file/line in each record.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if debug:
        level = logging.DEBUG
        format_string = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    else:
        format_string = '%(asctime)s - %(levelname)s - %(message)s'

    # stdout may carry JSON output, so console logs go to stderr
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.info("=" * 80)
    logging.info(f"NEW RUN STARTED - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    if debug:
        logging.info("DEBUG MODE ENABLED - Verbose logging active")
    logging.info("=" * 80)


def log_with_context(message, context=None, level=logging.DEBUG, logger=None):
    """
    Log a message followed by one DEBUG line per context entry.

    Args:
        message: Main log message
        context: Dict of contextual information (e.g. the offending line)
        level: Log level of the main message (default: DEBUG)
    """
    logger = logger or logging.getLogger()
    logger.log(level, message)

    if context and logger.isEnabledFor(logging.DEBUG):
        for key, value in context.items():
            str_value = str(value)
            if len(str_value) > 200:
                str_value = str_value[:200] + "..."
            logger.debug(f"  └─ {key}: {str_value}")
