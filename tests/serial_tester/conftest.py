import os
import sys

# Add host directory to path so the tests run from a plain checkout
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', 'host')))
