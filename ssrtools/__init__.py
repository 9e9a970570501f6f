"""
ssrtools: in-memory steady-state response (SSR) recordings.

- ssrtools.core: the Record container, event table validation and channel management
- ssrtools.processing: re-referencing and FIR filtering
"""
import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
