"""HTTP application for Thoughtboard."""
