"""
Shared test setup.
The modules live flat at the repository root, so put it on the path.
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
