import inspect
import logging.handlers
import os
import sys
from pathlib import Path

PACKAGE_DIR = "search6_cli"
LOG_FILE = os.getenv("LOG_FILE", None)


def resolve_level(name: str | None) -> str:
    level = (name or "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "WARNING"
    return level


class ClassNameFilter(logging.Filter):
    def filter(self, record):
        cwd = os.getcwd()
        abs_path = os.path.abspath(record.pathname)
        rel_path = os.path.relpath(abs_path, cwd)
        pkg_index = rel_path.find(PACKAGE_DIR + os.sep)
        if pkg_index != -1:
            relpath = rel_path[pkg_index + len(PACKAGE_DIR + os.sep):]
        else:
            relpath = rel_path
        if relpath.endswith(".py"):
            relpath = relpath[:-3]
        record.relpath = relpath.replace(os.sep, ".").replace("\\", ".")
        record.classname = ""
        frame = inspect.currentframe()
        while frame:
            code = frame.f_code
            if code.co_name == record.funcName:
                self_obj = frame.f_locals.get("self")
                if self_obj:
                    record.classname = self_obj.__class__.__name__
                    break
            frame = frame.f_back
        return True


class SmartClassFormatter(logging.Formatter):
    def format(self, record):
        # module level functions have no class, keep the dotted path tidy
        if record.classname and not record.classname.endswith("."):
            record.classname = f"{record.classname}."
        return super().format(record)


fmt = "%(asctime)s - [%(levelname)s] - %(relpath)s.%(classname)s%(funcName)s(): %(message)s {%(lineno)d}"
formatter = SmartClassFormatter(fmt)

# stdout belongs to the lookup result
console = logging.StreamHandler(sys.stderr)
console.setFormatter(formatter)

logger = logging.getLogger("Search6")
logger.setLevel(resolve_level(os.getenv("LOG_LEVEL")))
logger.addFilter(ClassNameFilter())
logger.addHandler(console)

if LOG_FILE:
    log_path = Path(LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        log_path, when="midnight", interval=1, backupCount=5, encoding="utf-8"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

logger.propagate = False
