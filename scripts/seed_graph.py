"""
Load the demo technology-stack graph into the configured store.
(Wrapper for graph_canvas.seed)
"""

import sys

from graph_canvas.seed import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
