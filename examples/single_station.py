"""Show the trains currently scheduled for one station.

Uses the debugging variant so a schema change upstream prints the failing
field path together with the raw response.
"""
import asyncio
import logging
import os

from amtrak import AmtrakClient, AmtrakDebuggingResponseError


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("single-station")

STATION_CODE = os.getenv("STATION_CODE", "PHL")


async def main() -> None:
    try:
        stations = await AmtrakClient.from_env().station_with_debugging(STATION_CODE)
    except AmtrakDebuggingResponseError as exc:
        logger.error("Amtraker changed its station schema at %s", exc.path)
        logger.debug("Raw response: %s", exc.response)
        raise

    if not stations:
        print(f'Station "{STATION_CODE}" does not exist')

    for station in stations.values():
        print(f'Current train scheduled for station "{station.name}": {", ".join(station.trains)}')


if __name__ == "__main__":
    asyncio.run(main())
