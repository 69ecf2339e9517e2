""" SigProp: signal propagation (light-time) solver between moving emitters and receivers """
from pathlib import Path

PROJECT_PATH = Path(__file__).parent

__version__ = "1.0.0"
