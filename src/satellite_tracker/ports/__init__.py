# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for orbit propagation and trajectory output.

Adapters implement these to plug in a concrete propagation theory.
"""
from abc import ABC, abstractmethod

from satellite_tracker.domain.tle import TleRecord
from satellite_tracker.domain.trajectory import PropagationWindow, Trajectory


class OrbitPropagator(ABC):
    """Port for turning an element set into a sampled trajectory."""

    @abstractmethod
    def propagate(
        self,
        tle: TleRecord,
        window: PropagationWindow,
        steps: int,
    ) -> Trajectory:
        """
        Sample the orbit at steps evenly spaced instants across window.

        Raises:
            PropagationError: Fewer than two samples could be computed.
        """
        ...


class TrajectoryWriter(ABC):
    """Port for persisting a propagated trajectory."""

    @abstractmethod
    def write_trajectory(self, trajectory: Trajectory, path: str, name: str = "") -> int:
        """Write trajectory to path. Returns the number of samples written."""
        ...
