"""Safe import utilities for optional and platform-specific modules."""


def safe_import(module_name: str):
    """
    Safely import a module, returning None if unavailable.
    
    Use this for platform-specific modules (winreg, wmi) and optional probes
    (cpuinfo, psutil) that may not be installed or available on all systems.
    
    Args:
        module_name: The module to import (e.g., "wmi", "ctypes.wintypes")
        
    Returns:
        The imported module, or None if import fails
        
    Examples:
        >>> winreg = safe_import("winreg")
        >>> if not winreg:
        ...     return None  # Not on Windows
    """
    try:
        return __import__(module_name, fromlist=[''])
    except ImportError:
        return None
    except Exception:
        # Some Windows-only packages raise OSError/AttributeError on import elsewhere
        return None
