"""Streamlit surfaces for the outreach workflow."""
