"""Runtime primitives shared by the launcher: context, env, logging, processes."""
