"""
Contract Deployment Wrapper
Runs scripts/deploy.py
"""

import subprocess
import sys

if __name__ == "__main__":
    print("=" * 70, file=sys.stderr)
    print("Decentralized Social Media Platform Deployment", file=sys.stderr)
    print("=" * 70, file=sys.stderr)
    print(file=sys.stderr)

    # Run deployment script
    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy"],
        cwd="."
    )

    sys.exit(result.returncode)
