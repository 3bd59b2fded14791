"""
=========
Interface
=========

The command line surface of ``rngkit``.

"""
