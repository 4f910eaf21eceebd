"""Application services (use cases) built on top of domain ports."""
