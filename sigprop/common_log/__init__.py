""" The `common_log` package implements an interface for the
`Logging Python package <https://docs.python.org/3/library/logging.html>`__.

All log objects required by this project are set and initialized here. To configure the logs, the user of this
package calls function `set_logs` below (to set the log level and path). Otherwise, the loggers are created on
first use with the INFO level and console output only.

The names of the loggers represent different high-level procedures in the SigProp project:
    * IO_LOG: logger to be used in input/output operations (configuration, exports)
    * MODEL_LOG: logger to be used in the different models (light-time solver, frames, corrections)

Examples:
    This is an example of how to set up and use the logger objects:

    >>> set_logs("DEBUG", "sample_log.txt")
    >>> log = get_logger(MODEL_LOG)
    >>> log.debug("Light-time iteration converged")
"""
from .logger import get_logger, clean_logs

__all__ = ["get_logger", "set_logs", "clean_logs", "IO_LOG", "MODEL_LOG"]


MODEL_LOG = str("MODEL_LOG")
IO_LOG = str("IO_LOG")


def set_logs(severity_level, log_path=""):
    """ Initializes the logger objects for the SigProp library

    Args:
        severity_level(str): severity level of the log. Available levels are 'CRITICAL', 'ERROR', 'WARNING', 'INFO',
            'DEBUG', 'NOTSET'
        log_path(str): path to save the log file
    """
    clean_logs()
    for log in (IO_LOG, MODEL_LOG):
        get_logger(log, severity_level, log_path)
