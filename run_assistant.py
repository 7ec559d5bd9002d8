import sys
import asyncio

from app.main import main

if __name__ == "__main__":
    if sys.platform == 'win32':
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

    print("🚀 Starting focus assistant (Ctrl+C to stop)")
    asyncio.run(main())
