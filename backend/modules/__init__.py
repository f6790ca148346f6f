"""
Feature modules for the appliance tracker backend.

Each module keeps its public API in interfaces.py, its pydantic models in
models.py and its exceptions in exceptions.py. Modules talk to each other
through those interfaces only; api/dependencies.py does the wiring.
"""
