import asyncio

import fmpcm.util
from fmpcm import CallError, Session

fmpcm.util.start_client_log()  # log client messages to ~/.fmpcm/client.log


async def main():
    async with Session("localhost:41000") as session:  # FreeMASTER Lite default port
        pcm = session.client
        print("Service version:", await pcm.get_app_version())

        try:
            print(await pcm.get_comm_port_info("bad"))
        except CallError as e:
            print("No such port:", e.error)  # exactly what the service reported

        speed = await pcm.read_variable("speed")
        await pcm.write_variable("speed", speed + 100)


asyncio.run(main())
