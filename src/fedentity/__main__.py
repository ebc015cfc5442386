#!/usr/bin/env python3
import argparse
import logging

from idpyoidc.logging import configure_logging

from fedentity.configure import create_from_config_file
from fedentity.entity import Entity

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(prog="fedentity")
    parser.add_argument('-d', "--debug", action='store_true')
    parser.add_argument(dest="config_file")
    args = parser.parse_args()

    config = create_from_config_file(args.config_file)
    if config.logging:
        configure_logging(config=config.logging)
    else:
        configure_logging(debug=args.debug)

    entity = Entity.from_config(config)

    _web_conf = config.webserver
    handle = entity.serve(host=_web_conf.get("domain", "0.0.0.0"), port=_web_conf.get("port"))
    print(f'Listening on {handle.host}:{handle.port}')
    try:
        handle.wait()
    except KeyboardInterrupt:
        pass
    finally:
        handle.stop()


if __name__ == "__main__":
    main()
