"""Progress agent: logs study sessions and reports whether a plan is on track."""
from google.adk.agents.llm_agent import Agent

from study_planner.agents.tools import (
    get_plan_progress_tool,
    get_study_plan_tool,
    set_plan_status,
    update_topic_progress,
)

progress_agent = Agent(
    model="gemini-2.5-flash",
    name="progress_agent",
    description="Records progress on study plan topics and reports whether the learner is on track.",
    instruction="""You track a learner's progress on an existing study plan.

- Use get_study_plan_tool to look up topic IDs by name before logging progress.
- Call update_topic_progress when the learner reports studying a topic
  (status in_progress or completed, hours spent, optional notes and confidence 1-5).
- Call get_plan_progress_tool to report overall progress and whether the plan is on track.
- Call set_plan_status to pause, resume (active) or complete a plan. A completed plan cannot be reopened.

Always relay the tool's message.""",
    tools=[
        get_study_plan_tool,
        update_topic_progress,
        get_plan_progress_tool,
        set_plan_status,
    ],
)
