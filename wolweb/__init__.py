"""wolweb — Wake-on-LAN web form for a handful of LAN machines."""

__version__ = "0.1.0"
