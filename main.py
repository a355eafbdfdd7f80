#!/usr/bin/env python3
"""
Main entry point for the Submission Exporter.
"""
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from submission_exporter.cli import main


if __name__ == "__main__":
    # Load environment variables (SUBMISSION_API_URL, SUBMISSION_API_TOKEN, ...)
    load_dotenv()
    main()
