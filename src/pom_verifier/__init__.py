"""Hosting-policy verification for Maven pom.xml build descriptors."""

__version__ = "0.1.0"
