#!/usr/bin/env python3
"""
WCAG Reference - Convenience CLI Script

Look up WCAG success criteria and techniques without installing the package.

Usage:
    python wcag_ref.py criterion VERSION NUMBER [options]
    python wcag_ref.py technique VERSION CODE [options]

Options:
    --link              Print only the direct link
    -f, --format FMT    Output format: text or json (default: text)
    --data-dir DIR      Use dataset files from DIR
    -v, --verbose       Verbose output
    --version           Show version

Examples:
    python wcag_ref.py criterion 2.1 2.1.1
    python wcag_ref.py technique 2.2 ARIA12 --link
    python wcag_ref.py criterion 2.0 1.4.3 -f json
"""

import sys
from pathlib import Path

# Add package to path if running directly
package_dir = Path(__file__).parent
if str(package_dir) not in sys.path:
    sys.path.insert(0, str(package_dir))

from wcag_reference.cli import main

if __name__ == '__main__':
    sys.exit(main())
