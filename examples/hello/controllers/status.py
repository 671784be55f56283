import asyncio

from roost import Controller, route


@route("/api/status")
class StatusController(Controller):
    async def get(self):
        await asyncio.sleep(0)
        return {"status": "ok", "version": "0.1.0"}
