from .base import BaseAgent, AgentMessage, MessageType
from .orchestrator import OrchestratorAgent
from .coverage_agent import CoverageAgent
from .validator_agent import ValidatorAgent
from .planner_agent import PlannerAgent

__all__ = [
    'BaseAgent', 'AgentMessage', 'MessageType',
    'OrchestratorAgent',
    'CoverageAgent',
    'ValidatorAgent',
    'PlannerAgent'
]
