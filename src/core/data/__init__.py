"""
L0 Data — static tables: constants, profile map, install chains.

Pure data, no I/O.  Everything downstream reads from these modules.
"""
