"""Product mockup generation: scene catalog, prompt building and the job queue."""

__version__ = "0.1.0"
