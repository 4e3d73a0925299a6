"""dido: AI-assisted git commits for one repository or a whole directory tree."""

__version__ = "0.1.1"
