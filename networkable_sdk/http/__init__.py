"""Networkable SDK HTTP module.

This module provides the HTTP layer of the Networkable SDK: a controller mixin
that gains request helpers by declaring a base URL, and a model contract for
objects exchanged with an API as JSON.

The module includes utilities for:
- Appending query parameters to URLs
- Dispatching single requests on a shared, lazily created session
- Decoding JSON payloads into mappings and model objects
- Decoding image payloads into Pillow images or numpy arrays
"""
