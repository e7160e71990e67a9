"""Test configuration: make the liftplan package importable without installing."""
import sys
from pathlib import Path

# Add project root to path so `from liftplan.xxx import` works
sys.path.insert(0, str(Path(__file__).parent.parent))
