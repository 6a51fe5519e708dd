#!/usr/bin/env python3
"""
Master Pipeline Orchestration Script

Runs the complete survey pipeline:
1. Clean the raw export into data/silver/survey/cleaned_data.csv
2. Run the standard analyses (charts + summary) on the cleaned table

Usage:
    # Full pipeline
    python scripts/run_pipeline.py

    # Custom raw export
    python scripts/run_pipeline.py --raw-file downloads/export.csv

    # Re-run analyses on an existing cleaned table
    python scripts/run_pipeline.py --skip-clean
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime
import subprocess

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.append(str(PROJECT_ROOT))

from config.paths import DEFAULT_RAW_FILE, CLEANED_DATA_FILE, ensure_directories


def print_header(text):
    """Print a formatted header"""
    print('\n' + '=' * 80)
    print(text.center(80))
    print('=' * 80 + '\n')


def run_command(cmd, description):
    """Run a command and handle errors"""
    print(f'\n>>> {description}')
    print(f'Command: {" ".join(cmd)}')
    print()

    try:
        subprocess.run(cmd, check=True, cwd=PROJECT_ROOT)
        print(f'\n✓ {description} completed successfully')
        return True
    except subprocess.CalledProcessError as e:
        print(f'\n✗ {description} failed with exit code {e.returncode}')
        return False


def clean_dataset(raw_file, cleaned_file):
    """Build the cleaned survey table"""
    print_header('STEP 1: CLEAN RAW SURVEY EXPORT')

    if not Path(raw_file).exists():
        print(f'✗ Raw export: NOT FOUND')
        print(f'  Expected: {raw_file}')
        return False

    cmd = [sys.executable, '-m', 'data_engineering.clean.build_cleaned_dataset',
           '--raw-file', str(raw_file), '--output-file', str(cleaned_file)]
    return run_command(cmd, 'Cleaned dataset builder')


def analyze_dataset(cleaned_file, no_figures=False):
    """Run the standard analyses"""
    print_header('STEP 2: GROUPED MEANS AND TREND')

    cmd = [sys.executable, '-m', 'analysis.survey_analysis',
           '--cleaned-file', str(cleaned_file)]
    if no_figures:
        cmd.append('--no-figures')

    return run_command(cmd, 'Survey analysis')


def main():
    """Main pipeline orchestration"""
    parser = argparse.ArgumentParser(
        description='Run the complete survey pipeline',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full pipeline
  python scripts/run_pipeline.py

  # Analyses only (cleaned table already built)
  python scripts/run_pipeline.py --skip-clean

  # No charts
  python scripts/run_pipeline.py --no-figures
        """
    )

    parser.add_argument('--raw-file', type=str, default=str(DEFAULT_RAW_FILE),
                        help='Path to raw survey CSV')
    parser.add_argument('--cleaned-file', type=str, default=str(CLEANED_DATA_FILE),
                        help='Path of the cleaned CSV')
    parser.add_argument('--skip-clean', action='store_true',
                        help='Skip cleaning and reuse the existing cleaned CSV')
    parser.add_argument('--no-figures', action='store_true',
                        help='Skip chart rendering')

    args = parser.parse_args()

    print_header('NUTRITION / PHYSICAL ACTIVITY / OBESITY - SURVEY PIPELINE')
    print(f'Started: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    print()

    print('Ensuring directory structure...')
    ensure_directories()
    print('✓ Directory structure ready\n')

    start_time = datetime.now()

    if not args.skip_clean:
        if not clean_dataset(args.raw_file, args.cleaned_file):
            print('\nPipeline aborted.')
            return 1

    all_success = analyze_dataset(args.cleaned_file, no_figures=args.no_figures)

    end_time = datetime.now()

    print_header('PIPELINE SUMMARY')
    print(f'Started:  {start_time.strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'Finished: {end_time.strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'Duration: {end_time - start_time}')
    print()

    if all_success:
        print('✓ PIPELINE COMPLETED SUCCESSFULLY')
        print()
        return 0

    print('✗ PIPELINE COMPLETED WITH ERRORS')
    print('Check the error messages above for details.')
    print()
    return 1


if __name__ == '__main__':
    sys.exit(main())
