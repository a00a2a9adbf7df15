from mcp_integration.core.jira_client import JiraClient
from mcp_integration.tools.registry import registry


@registry.register(
    name="jira_get_ticket",
    service="jira",
    description="Get details of a Jira ticket",
    input_schema={
        "type": "object",
        "properties": {
            "ticketID": {"type": "string", "description": "Jira ticket ID"}
        },
        "required": ["ticketID"]
    }
)
def jira_get_ticket(jira: JiraClient, ticketID: str) -> str:
    return jira.get_ticket_by_id(ticketID)


@registry.register(
    name="jira_search_tickets",
    service="jira",
    description="Search for Jira tickets using JQL",
    input_schema={
        "type": "object",
        "properties": {
            "jql": {"type": "string", "description": "JQL query string"}
        },
        "required": ["jql"]
    }
)
def jira_search_tickets(jira: JiraClient, jql: str) -> str:
    return jira.search_tickets(jql)


@registry.register(
    name="jira_create_ticket",
    service="jira",
    description="Create a new Jira ticket",
    input_schema={
        "type": "object",
        "properties": {
            "projectKey": {"type": "string", "description": "Project key"},
            "summary": {"type": "string", "description": "Ticket summary"},
            "description": {"type": "string", "description": "Ticket description"}
        },
        "required": ["projectKey", "summary"]
    }
)
def jira_create_ticket(jira: JiraClient, projectKey: str, summary: str, description: str) -> str:
    return jira.create_ticket(projectKey, summary, description)
