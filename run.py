"""Launch the coordprint command line from a source checkout."""
import sys
import os

# Ensure src/ is on sys.path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from coordprint.main import main

if __name__ == "__main__":
    main()
