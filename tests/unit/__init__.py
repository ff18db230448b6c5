"""
Unit tests package.

Contains unit tests for individual modules in isolation. HTTP is replaced by
stub transports or a mocked requests session; nothing here touches a network.
"""
