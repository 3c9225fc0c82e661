# orbiter/pipeline/serialization.py
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from orbiter.config import settings


def snapshot(universe) -> Dict[str, Any]:
    """
    Wire snapshot for the rendering client:
    {simTime, startTime, timeScale, bodies: [...]}; a root's parent is 0.
    """
    return universe.to_dict()


def serialize(universe) -> str:
    return json.dumps(snapshot(universe))


def save_snapshot(universe, name_prefix: str = "snapshot", out_dir: Optional[str] = None) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    out = Path(out_dir or getattr(settings, "OUTPUT_DIR", "output"))
    out.mkdir(parents=True, exist_ok=True)
    filename = out / f"{name_prefix}_{ts}.json"
    with open(filename, "w") as f:
        json.dump(snapshot(universe), f, indent=2)
    return str(filename)
