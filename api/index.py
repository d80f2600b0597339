# Serverless entrypoint: every request is routed here by the host.
# Add backend to path so the "luelue" package and "config" resolve.
import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent / "backend"
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from luelue import create_app

app = create_app()
