"""`python -m salesbot`"""

from .main import run

run()
