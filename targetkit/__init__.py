"""
TargetKit - build one project for a fleet of target platforms.

Resolves target aliases to compiler target triples, provisions the toolchain
for each triple and invokes the compiler for each of them in order.
"""
