"""forgekit -- scaffold React, Tailwind and Next.js projects from the command line."""

__version__ = "0.3.0"
