#!/usr/bin/env python
"""
Convenience script to run the LayerZoom debug app during development.

Usage:
    python run.py [--relative-scale 3] [--expand-fraction 0.3] [--debug]
"""

import sys
import traceback
from pathlib import Path
from datetime import datetime

# Add src to path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

# Log file for crash reports
log_file = Path(__file__).parent / "crash_log.txt"

def main_with_error_handling():
    try:
        from layerzoom_app.__main__ import main
        main(sys.argv[1:])
    except Exception:
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"CRASH at {datetime.now()}\n")
            f.write(f"{'='*60}\n")
            f.write(traceback.format_exc())
            f.write("\n")

        print("\n" + "="*60)
        print("APPLICATION CRASHED!")
        print("="*60)
        traceback.print_exc()
        print(f"\nError log saved to: {log_file}")
        sys.exit(1)

if __name__ == "__main__":
    main_with_error_handling()
