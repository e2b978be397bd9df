import asyncio
import sys
import os
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client


async def call_and_print(session: ClientSession, tool: str, arguments: dict):
    print(f"\n--- Testing {tool} ---")
    print(f"Input SQL: {arguments['sql'].strip()}")
    result = await session.call_tool(tool, arguments=arguments)
    print("Result:")
    print(result.content[0].text)


async def run():
    # Get absolute path to server.py
    server_script = os.path.abspath("server.py")

    server_params = StdioServerParameters(
        command=sys.executable,
        args=[server_script],
        env=None
    )

    print(f"Starting server: {sys.executable} {server_script}")

    async with stdio_client(server_params) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()

            await call_and_print(session, "format_query", {
                "sql": "SELECT id, name, email FROM users WHERE active = 1 AND region = 'EU' ORDER BY name"
            })

            # Subquery, join and CASE block
            sql_nested = """
            select o.id, case when o.total > 100 then 'large' else 'small' end as size
            from orders o left join (select user_id, count(*) as n from visits group by user_id) v
            on o.user_id = v.user_id where o.created_at between '2024-01-01' and '2024-12-31'
            """
            await call_and_print(session, "format_query", {"sql": sql_nested})
            await call_and_print(session, "format_query", {"sql": sql_nested, "highlight": True})

            sql_cte = "WITH recent AS (SELECT * FROM orders WHERE created_at > '2024-01-01'), big AS (SELECT * FROM recent WHERE total > 500) SELECT COUNT(*) FROM big"
            await call_and_print(session, "format_query", {"sql": sql_cte})
            await call_and_print(session, "verify_formatting", {"sql": sql_cte})

            await call_and_print(session, "minify_query", {
                "sql": """
                SELECT  a ,  b
                FROM    t
                WHERE   c IN ( 1 , 2 )
                """
            })

if __name__ == "__main__":
    asyncio.run(run())
