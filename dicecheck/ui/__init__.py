"""Streamlit front-end for DiceCheck."""
