"""Root agent: ADK entrypoint; routes to planner and progress agents."""
from google.adk.agents.llm_agent import Agent

from study_planner.agents.planner_agent import planner_agent
from study_planner.agents.progress_agent import progress_agent

root_agent = Agent(
    model="gemini-2.5-flash",
    name="root_agent",
    description="A helpful assistant for planning study time toward exams, interviews, jobs and projects.",
    instruction="Answer user questions and route to planner_agent for new goals and plans, or progress_agent for logging study and checking progress.",
    sub_agents=[planner_agent, progress_agent],
)
