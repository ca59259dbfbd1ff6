# Needs the full FreeMASTER application, the Lite service has no events.
import asyncio

import fmpcm.util
from fmpcm import Session
from fmpcm.types import EVENTS

WATCH_TIME = 10  # s

fmpcm.util.start_client_log(log_to_stdout=True, log_level="DEBUG")


def on_variable_changed(name, sub_id, value):
    print(f"{name} [{sub_id}] = {value}")


async def main():
    # handlers can be given up front, or assigned on the extended client later
    async with Session(
        "localhost:41000",
        event_handlers={EVENTS.VARIABLE_CHANGED: on_variable_changed},
    ) as session:
        ext = session.client.activate()
        ext.on_recorder_done = lambda: print("Recorder finished")

        await ext.enable_events(True)
        sub_id = await ext.subscribe_variable("speed", 100)
        await asyncio.sleep(WATCH_TIME)
        await ext.unsubscribe_variable(sub_id)
        await ext.enable_events(False)


asyncio.run(main())
