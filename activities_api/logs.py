import json, logging, time, uuid
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("activities_api.operations")


def setup_logging(level: str = "INFO"):
    """Root stream handler unless one is already installed; level on the package logger."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("activities_api").setLevel(level)


class LogContext:
    def __init__(self, action: str):
        self.action = action
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.payload = None
        self.entity_id = None

    def set_entity(self, eid):
        self.entity_id = eid

    def set_payload(self, obj): self.payload = obj

    def write(self, result: str = "OK", err: Optional[str] = None):
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        rec = {
            "action": self.action,
            "request_id": self.request_id,
            "entity_id": self.entity_id,
            "payload": self.payload,
            "result": result,
            "err_msg": err,
            "latency_ms": elapsed_ms,
        }
        level = logging.INFO if result == "OK" else logging.ERROR
        logger.log(level, json.dumps(rec, ensure_ascii=False, default=str))
