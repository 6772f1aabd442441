"""bundlekeeper - sensitive data sanitization for bundle installations.

bundlekeeper sits between a bundle installation manager and its two storage
boundaries: the execution-history store and the secret store. It makes sure
sensitive parameter and output values never reach the history store in
plaintext, and it rebuilds the plaintext values when a bundle action needs
them.

Key Features:
- Secret indirection records (strategies) for parameters and outputs
- Run records that own their parameter sets and project to execution claims
- Pluggable secret stores (in-memory, filesystem, host sources)
- Sensitivity read from bundle metadata on every call, never cached

Version: 0.1.0
"""

__version__ = "0.1.0"
