"""videostore module execution entry point.

Fetch, save, or stream video with ``python -m videostore``. For example::

    python -m videostore --address localhost:8080 --name vs-1 stream --last 30 -o clip.mp4

"""

import asyncio
import logging
import os
import sys
import tempfile

import grpc

from videostore.client import ClientOptions
from videostore.client import VideoStoreClient
from videostore.exceptions import VideoStoreError
from videostore.invocation import address_from_args
from videostore.invocation import configure_logging
from videostore.invocation import make_parser
from videostore.invocation import time_range_from_args

logger = logging.getLogger("videostore.__main__")


def _channel(address: str, tls: bool) -> grpc.aio.Channel:
    if tls:
        return grpc.aio.secure_channel(address, grpc.ssl_channel_credentials())
    return grpc.aio.insecure_channel(address)


async def run(args) -> None:
    from_, to = time_range_from_args(args)
    address = address_from_args(args)
    options = ClientOptions(timeout=args.timeout)
    async with _channel(address, args.tls) as channel:
        store = VideoStoreClient(channel, args.name, options, remote_name=args.remote)
        logger.info(f"{args.command} {store.name} from {from_} to {to} ({args.container})")
        if args.command == "fetch":
            data = await store.fetch(from_, to, args.container)
            with open(args.output, "wb") as fh:
                fh.write(data)
            logger.info(f"Wrote {len(data)} bytes to {args.output}")
        elif args.command == "save":
            filename = await store.save(from_, to, args.container, metadata=args.metadata, async_=args.async_)
            print(filename)
        elif args.command == "stream":
            total = await _stream_to_file(store, from_, to, args.container, args.output)
            logger.info(f"Stream complete: wrote {total} bytes to {args.output}")


async def _stream_to_file(store: VideoStoreClient, from_: str, to: str, container: str, output: str) -> int:
    """Stream into a temporary file beside *output*, then move it into place.

    *output* is only created (or replaced) when the stream completes.
    """
    directory = os.path.dirname(os.path.abspath(output))
    with tempfile.NamedTemporaryFile(dir=directory, prefix=".videostore-", delete=False) as fh:
        partial = fh.name
        try:
            total = await store.fetch_stream_to(from_, to, container, fh)
        except BaseException:
            fh.close()
            os.unlink(partial)
            raise
    os.replace(partial, output)
    return total


def main(argv=None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)
    if args.log_level is not None:
        configure_logging(args.log_level)
    try:
        asyncio.run(run(args))
    except VideoStoreError as e:
        parser.error(str(e))
    except grpc.aio.AioRpcError as e:
        print(f"{args.command} failed: {e.code().name}: {e.details()}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
