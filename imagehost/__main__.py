"""
Run the image server.

Usage:
  imagehost                       -> local disk backend (LOCAL_STORAGE_PATH)
  imagehost --s3 --bucket NAME    -> S3 backend
"""
import argparse
import logging
import sys

import uvicorn

from imagehost import config
from imagehost.main import create_app
from imagehost.storage import build_storage

logger = logging.getLogger("imagehost")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="imagehost", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--s3", action=argparse.BooleanOptionalAction,
                        default=config.STORAGE_BACKEND.lower() == "s3",
                        help="use AWS S3 as backend (--no-s3 forces local disk)")
    parser.add_argument("--bucket", default=config.AWS_S3_BUCKET, help="AWS S3 bucket name")
    parser.add_argument("--host", default=config.HOST)
    parser.add_argument("--port", type=int, default=config.PORT)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logger.info("s3=%s", args.s3)
    logger.info("bucket=%s", args.bucket)
    try:
        storage = build_storage("s3" if args.s3 else "local", bucket=args.bucket)
    except RuntimeError as e:
        logger.error("%s", e)
        return 1
    uvicorn.run(create_app(storage), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
