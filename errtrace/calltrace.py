"""
Call-site capture for error records.

``capture(skip)`` walks the live interpreter stack and reports the file,
qualified function name and line of the frame ``skip`` levels above
``capture`` itself. It never raises: asking for a frame past the bottom of
the stack yields a zero-valued ``CallSite``.
"""

import inspect

from errtrace.models.call_site import CallSite


def capture(skip: int) -> CallSite:
    """
    Capture the call site ``skip`` frames above this function.
    
    Args:
        skip: 0 is ``capture`` itself, 1 its caller, and so on
        
    Returns:
        Frozen call site, or ``CallSite()`` if the stack is shallower
    """
    frame = inspect.currentframe()
    try:
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back
        
        if frame is None:
            return CallSite()
        
        code = frame.f_code
        module = frame.f_globals.get("__name__", "")
        operation = f"{module}.{code.co_qualname}" if module else code.co_qualname
        
        return CallSite(file=code.co_filename, operation=operation, line=frame.f_lineno)
    finally:
        # Break the frame reference cycle
        del frame
