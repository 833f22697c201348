"""Service layer and HTTP application for the CodeMenu bridge."""
