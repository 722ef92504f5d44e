"""gemfloat - send a scratch buffer to Google Gemini and read the answer
in a floating window.
"""

__version__ = "0.1.0"
