from typing import List
import argparse
import asyncio
import json
import logging

logger = logging.getLogger(__name__)

from com.skynetlabs.dnslink.resolve.dnslink import Resolver
from com.skynetlabs.dnslink.resolve.domain import validate_domain
from com.skynetlabs.dnslink.resolve.errors import DnslinkException
from com.skynetlabs.dnslink.resolve.skylink import convert_skylink_to_base32


async def realMain() -> None:
    parser = argparse.ArgumentParser(
        prog="dnslink-resolve", description="Resolve skynet dnslink records"
    )
    parser.add_argument("domain", nargs="+", help="The domain(s) to resolve.")
    parser.add_argument(
        "--uri",
        default=None,
        help="The uri requested along with the domain, e.g. /<skylink>/index.html",
    )
    parser.add_argument(
        "--base32",
        action="store_true",
        help="Print resolved skylinks in their base32 form.",
    )

    args = vars(parser.parse_args())

    domains: List[str] = args.get("domain", [])

    logging.basicConfig(level=logging.INFO)

    resolver = Resolver()
    for domain in domains:
        try:
            validate_domain(domain)
            result = await resolver.resolve(domain, args.get("uri"))
            if args.get("base32") and result.skylink is not None:
                result.skylink = convert_skylink_to_base32(result.skylink)
            print(f"{domain} {json.dumps(result.to_json())}")
        except DnslinkException as e:
            print(f"{domain} error {e.kind.value}: {e.message}")
        except Exception:
            logging.exception("Exception resolving domain %s", domain)


def main() -> None:
    asyncio.run(realMain())


if __name__ == "__main__":
    main()
