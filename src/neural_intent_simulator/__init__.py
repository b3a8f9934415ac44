"""Neural Intent Simulator package.

The neural intent simulator, or NIS, synthesizes multi-channel integer signals
that stand in for motor-intent recordings from a brain-computer interface. It is
meant to feed decoders and processing pipelines under development when real
electrode data is not available.

The structure of this package is as follows:
 - :mod:`neural_intent_simulator.core` contains the signal generation engine and
   the data types it produces.
 - :mod:`neural_intent_simulator.util` contains utility functions for loading
   settings and configuring the runtime.
 - :mod:`neural_intent_simulator.scripts` hosts the entry points for the scripts
   that are exposed to the user.
"""
