"""
Finance Tracker API package.

The FastAPI application lives in ``api.app``; import ``create_app`` from
there to build an instance with a custom service container.
"""
