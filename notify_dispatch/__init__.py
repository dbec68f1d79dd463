"""Eco-Points notification dispatcher: templated email and SMS delivery."""

__version__ = "0.1.0"
