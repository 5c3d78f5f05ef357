"""Test configuration — ensure hevy_stats is importable without installing."""
import sys
from pathlib import Path

# Add project root to path so `from hevy_stats.xxx import` works
sys.path.insert(0, str(Path(__file__).parent.parent))
