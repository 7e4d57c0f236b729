"""
Rendering collaborators for bonsai frames: text buffers and data export.
"""

from .ascii import fill_buffer, render_text, GLYPHS
from .exporters import export_frame_data, load_frame_data, frame_from_data
