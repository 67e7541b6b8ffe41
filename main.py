"""
Entry Point for Cloud Server Deployment

Starts the QuantumSynth API server in the current process, for hosts
that only allow a single startup command:

    python main.py serve

Cloud servers that set the PORT environment variable are honoured
through the normal configuration layer.
"""

import sys

from quantumsynth.cli import main

if __name__ == "__main__":
    sys.exit(main())
