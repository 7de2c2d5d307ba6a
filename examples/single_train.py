"""Report where a single train is relative to Philadelphia."""
import asyncio
import logging
import os

from amtrak import AmtrakClient, AmtrakError, TrainStatus


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("single-train")

TRAIN_ID = os.getenv("TRAIN_ID", "612-5")
STATION_CODE = "PHL"


async def main() -> None:
    try:
        response = await AmtrakClient.from_env().train(TRAIN_ID)
    except AmtrakError as exc:
        logger.error("Unable to look up train %s: %s", TRAIN_ID, exc)
        return

    trains = response.get(TRAIN_ID)
    if trains is None:
        print(f'Train "{TRAIN_ID}" is not currently in the Amtrak network')
        return
    if not trains:
        print(f'Train "{TRAIN_ID}" response was empty')
        return
    if len(trains) > 1:
        print(f'More than one train returned for "{TRAIN_ID}"')
        return

    stop = next((stop for stop in trains[0].stations if stop.code == STATION_CODE), None)
    if stop is None:
        print(f'Philadelphia station was not found in the "{TRAIN_ID}" route')
    elif stop.status is TrainStatus.ENROUTE:
        print("Train is enroute to Philadelphia station")
    elif stop.status is TrainStatus.STATION:
        print("Train is currently at Philadelphia station")
    elif stop.status is TrainStatus.DEPARTED:
        print("Train has departed Philadelphia station")
    else:
        print("The train status is unknown")


if __name__ == "__main__":
    asyncio.run(main())
