"""List Keystone trains and the station each one is currently heading to."""
import asyncio
import logging
import os
from datetime import datetime, timezone

from amtrak import AmtrakClient


logging.basicConfig(level=logging.INFO)

ROUTE_NAME = os.getenv("ROUTE_NAME", "Keystone")


async def main() -> None:
    trains = await AmtrakClient.from_env().trains()

    for train in (train for group in trains.values() for train in group):
        if train.route_name != ROUTE_NAME:
            continue

        stop = train.current_stop()
        if stop is None:
            print(f"{train.train_id} train is heading to {train.destination_code}")
            continue

        if stop.arrival is not None:
            minutes = int((stop.arrival - datetime.now(timezone.utc)).total_seconds() // 60)
            eta = f"{minutes} minutes"
        else:
            eta = "N/A"

        print(
            f"{train.train_id} train is heading to {train.destination_name}, "
            f"currently enroute to {stop.name} with an ETA of {eta}"
        )


if __name__ == "__main__":
    asyncio.run(main())
