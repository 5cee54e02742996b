"""clawsync - agent profile reconciler for the OpenClaw runtime."""

__version__ = "0.1.0"
