"""Print every station in a given state."""
import asyncio
import logging
import os

from amtrak import AmtrakClient


logging.basicConfig(level=logging.INFO)

STATE = os.getenv("STATE", "PA")


async def main() -> None:
    stations = await AmtrakClient.from_env().stations()

    for station in stations.values():
        if station.state == STATE:
            print(f'Station "{station.name}" is in {STATE}')


if __name__ == "__main__":
    asyncio.run(main())
