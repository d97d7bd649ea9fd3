# io/game_logging.py
import json
import logging
import sys
from dataclasses import asdict

from street_quiz.app.hooks import NoopHooks
from street_quiz.io.recorder import Recorder


def _default_json_logger(name="street_quiz", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, ensure_ascii=False)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class GameLogging(NoopHooks):
    """
    One place to shape and emit structured logs for round and game events.
    Scoring events also go to the recorder for analytics.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    def _biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)

    # --------------- round lifecycle -----------------------------

    def round_start(self, ev):
        self._emit("INFO", "round_start", **asdict(ev))

    def resolved(self, ev):
        self._emit("INFO", "geometry_resolved", **asdict(ev))

    def failed(self, ev):
        self._emit("WARNING", "geometry_failed", **asdict(ev))
        self._biz(ev)

    def stale(self, *, street_name, token, current_token):
        self._emit(
            "INFO", "stale_resolution", street_name=street_name, token=token, current=current_token
        )

    def guess(self, *, round_index, lat, lon, replaced):
        if self.debug:
            self._emit("DEBUG", "guess", round_index=round_index, lat=lat, lon=lon, replaced=replaced)

    def submitted(self, ev):
        self._emit("INFO", "submitted", **asdict(ev))
        self._biz(ev)

    # --------------- game lifecycle -----------------------------

    def completed(self, ev):
        self._emit("INFO", "game_completed", **asdict(ev))
        self._biz(ev)

    def restarted(self, *, names):
        self._emit("INFO", "restarted", rounds=len(names))
