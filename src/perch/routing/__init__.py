"""Routing — route syntax checks and the host route table.

Routes are registered during the routing-init phase and compiled into
an immutable lookup structure when that phase ends.
"""
