"""Agent arena and agent handles."""

from ecosim.agents.base import Agent
from ecosim.agents.population import Population, DeathCause

__all__ = ["Agent", "Population", "DeathCause"]
