import logging, sys
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"

# Set by RequestIdMiddleware for the duration of a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

class RequestIdFilter(logging.Filter):
    """Stamp records with the id of the request being served, or "-"."""
    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True

def configure_logging(level: str = "INFO"):
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    if any(getattr(h, "_lensmatch", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    handler._lensmatch = True
    root.addHandler(handler)
