"""
UI Package for the LVDD calculator.

This package contains the Streamlit form and Plotly visualization utilities.
"""

from pathlib import Path

UI_DIR = Path(__file__).parent
