"""Neural Intent Simulator core package.

The core package hosts the engine that turns a motion intent into synthetic
multi-channel signals, together with the values it consumes and produces.

The structure of this package is as follows:
 - :mod:`batch` contains the :class:`batch.SignalBatch` class, which is the
   output of every generation strategy.
 - :mod:`clusters` contains the cluster partition and the cluster-activation
   synthesizer.
 - :mod:`generator` hosts :class:`generator.NeuralSignalGenerator`, the entry
   point that validates parameters and dispatches to a strategy.
 - :mod:`noise` contains the noise generators used by the trajectory strategy.
 - :mod:`pose` contains the :class:`pose.Pose` class used to express an intent.
 - :mod:`quantizer` converts floating point values into integer channel vectors.
 - :mod:`random_source` defines the random source protocol and its default
   implementation.
 - :mod:`settings` contains the data model used to parse and validate the
   config.
 - :mod:`trajectory` interpolates between two poses and injects noise.
"""
