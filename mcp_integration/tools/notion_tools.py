from mcp_integration.core.notion_client import NotionClient
from mcp_integration.tools.registry import registry


@registry.register(
    name="notion_search_pages",
    service="notion",
    description="Search for Notion pages by title",
    input_schema={
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Page title to search for"}
        },
        "required": ["title"]
    }
)
def notion_search_pages(notion: NotionClient, title: str) -> str:
    return notion.search_pages_by_title(title)


@registry.register(
    name="notion_get_page",
    service="notion",
    description="Get a Notion page by URL",
    input_schema={
        "type": "object",
        "properties": {
            "url": {"type": "string", "description": "Page URL"}
        },
        "required": ["url"]
    }
)
def notion_get_page(notion: NotionClient, url: str) -> str:
    return notion.get_page_by_url(url)


@registry.register(
    name="notion_get_database",
    service="notion",
    description="Get a Notion database by ID",
    input_schema={
        "type": "object",
        "properties": {
            "databaseID": {"type": "string", "description": "Database ID"}
        },
        "required": ["databaseID"]
    }
)
def notion_get_database(notion: NotionClient, databaseID: str) -> str:
    return notion.get_database(databaseID)


@registry.register(
    name="notion_create_page",
    service="notion",
    description="Create a new Notion page",
    input_schema={
        "type": "object",
        "properties": {
            "parentID": {"type": "string", "description": "Parent page ID"},
            "title": {"type": "string", "description": "Page title"},
            "content": {"type": "string", "description": "Page content"}
        },
        "required": ["parentID", "title"]
    }
)
def notion_create_page(notion: NotionClient, parentID: str, title: str, content: str) -> str:
    return notion.create_page(parentID, title, content)


@registry.register(
    name="notion_create_database",
    service="notion",
    description="Create a new Notion database",
    input_schema={
        "type": "object",
        "properties": {
            "parentPageID": {"type": "string", "description": "Parent page ID"},
            "title": {"type": "string", "description": "Database title"}
        },
        "required": ["parentPageID", "title"]
    }
)
def notion_create_database(notion: NotionClient, parentPageID: str, title: str) -> str:
    return notion.create_database(parentPageID, title)


@registry.register(
    name="notion_update_page",
    service="notion",
    description="Update an existing Notion page",
    input_schema={
        "type": "object",
        "properties": {
            "pageID": {"type": "string", "description": "Page ID to update"},
            "title": {"type": "string", "description": "New page title"},
            "content": {"type": "string", "description": "Content to append to the page"}
        },
        "required": ["pageID"]
    }
)
def notion_update_page(notion: NotionClient, pageID: str, title: str, content: str) -> str:
    return notion.update_page(pageID, title, content)


@registry.register(
    name="notion_update_database",
    service="notion",
    description="Update an existing Notion database",
    input_schema={
        "type": "object",
        "properties": {
            "databaseID": {"type": "string", "description": "Database ID to update"},
            "title": {"type": "string", "description": "New database title"}
        },
        "required": ["databaseID", "title"]
    }
)
def notion_update_database(notion: NotionClient, databaseID: str, title: str) -> str:
    return notion.update_database(databaseID, title)
