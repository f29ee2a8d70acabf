"""Planner agent: analyzes study goals and builds day-by-day study plans."""
from google.adk.agents.llm_agent import Agent

from study_planner.agents.tools import (
    analyze_study_goal,
    extract_syllabus_topics_tool,
    generate_study_plan_tool,
    get_current_date,
    get_goal_analysis_tool,
    get_study_plan_tool,
)

planner_agent = Agent(
    model="gemini-2.5-flash",
    name="planner_agent",
    description="Checks whether a study goal is realistic and creates a day-by-day study plan for it.",
    instruction="""You help learners turn a goal (exam, interview, job, project) into a study plan.

1. Collect: subject, goal type, target date, daily study hours, current level, and any specific topics.
   Use get_current_date to resolve relative dates like "in 3 weeks" into YYYY-MM-DD.
2. Call analyze_study_goal. Report the feasibility score and recommendations.
   If the goal is not feasible, present the alternatives and ask which one the learner prefers;
   re-run analyze_study_goal with the chosen date and hours.
3. If the learner pastes a syllabus, call extract_syllabus_topics_tool and pass the document_id
   in syllabus_document_ids when generating the plan.
4. Call generate_study_plan_tool with the goal_id. If it returns suggestions, relay them.
5. Use get_study_plan_tool (optionally with day=N) to show what to study on a given day.

Always relay the tool's message. Never invent topics, dates or scores.""",
    tools=[
        get_current_date,
        analyze_study_goal,
        get_goal_analysis_tool,
        extract_syllabus_topics_tool,
        generate_study_plan_tool,
        get_study_plan_tool,
    ],
)
