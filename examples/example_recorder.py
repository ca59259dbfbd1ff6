import asyncio

import fmpcm.util
from fmpcm import Session

REC_ID = 0
POLL_PERIOD = 0.2  # s

# GetRecorderStatus codes
REC_RUNNING = 0x02
REC_DATA_READY = 0x05

fmpcm.util.start_client_log(log_to_stdout=True, log_level="INFO")


async def main():
    async with Session("localhost:41000") as session:
        pcm = session.client

        limits = await pcm.get_recorder_limits(REC_ID)
        print("Recorder limits:", limits)

        await pcm.setup_recorder(
            REC_ID,
            {"pointsTotal": 1000, "pointsPreTrigger": 100, "timeDiv": 1},
            ["speed", "current"],
            [{"name": "speed", "trgType": 0x01, "trgThr": 1000}],  # rising edge
        )
        await pcm.start_recorder(REC_ID)

        status = REC_RUNNING
        while status == REC_RUNNING:
            await asyncio.sleep(POLL_PERIOD)
            status = await pcm.get_recorder_status(REC_ID)

        if status != REC_DATA_READY:
            print(f"Recorder stopped without data (status {status:#04x})")
            return

        speed, current = await pcm.get_recorder_data(REC_ID)
        print(f"Recorded {len(speed)} samples, max speed {max(speed)}")


asyncio.run(main())
