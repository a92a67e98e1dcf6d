#!/usr/bin/env python3
"""
Pylint runner script for the redpacket project.

This script provides a convenient way to run pylint on the package and its tests.
"""

import subprocess
import sys
from pathlib import Path


def main():
    """Run pylint on the redpacket package."""
    project_root = Path(__file__).parent.parent
    targets = [project_root / "redpacket"]
    if "--tests" in sys.argv[1:]:
        targets.append(project_root / "tests")

    for target in targets:
        if not target.exists():
            print(f"Error: Directory {target} not found")
            sys.exit(1)

    cmd = [sys.executable, "-m", "pylint", *map(str, targets), "--output-format=text"]

    print(f"Running: {' '.join(cmd)}")
    print("-" * 60)

    try:
        result = subprocess.run(cmd, cwd=project_root, check=False)
        sys.exit(result.returncode)
    except KeyboardInterrupt:
        print("\nLinting interrupted by user")
        sys.exit(1)
    except OSError as e:
        print(f"Error running pylint: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
