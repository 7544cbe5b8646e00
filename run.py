"""
Entry Point Script (Bootstrap)
==============================
Development runner that works without installing the package.

It lives outside the 'src' package and puts 'src' on 'sys.path' so imports
like 'from forceplateviz.model...' resolve.

Usage:
    $ python run.py --recording session.json
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from forceplateviz.main import main

if __name__ == "__main__":
    main()
