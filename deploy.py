"""
Deployment Wrapper
Runs one script module from scripts/ and forwards its exit code

Usage:
    python deploy.py deploy_traceability
"""

import subprocess
import sys
from pathlib import Path

SCRIPTS_DIR = Path(__file__).resolve().parent / "scripts"


def available_scripts():
    return sorted(
        p.stem for p in SCRIPTS_DIR.glob("*.py")
        if not p.stem.startswith("_")
    )


if __name__ == "__main__":
    scripts = available_scripts()

    if len(sys.argv) != 2 or sys.argv[1] not in scripts:
        print("Usage: python deploy.py <script>")
        print("Available scripts:")
        for name in scripts:
            print(f"  {name}")
        sys.exit(1)

    print("=" * 70)
    print(f"LUKSO Testnet: {sys.argv[1]}")
    print("=" * 70)
    print()

    result = subprocess.run(
        [sys.executable, "-m", f"scripts.{sys.argv[1]}"],
        cwd=str(SCRIPTS_DIR.parent)
    )

    sys.exit(result.returncode)
