"""Textual front end for the scratchpad console."""
