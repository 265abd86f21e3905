"""Functional tests: the command as a service author runs it.

Assert exit codes, printed output and the resulting process defaults.
"""
