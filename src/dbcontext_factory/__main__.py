"""Print the resolved configuration for a set of arguments.

Usage:
    python -m dbcontext_factory
    python -m dbcontext_factory --environment=Staging
    python -m dbcontext_factory --ConnectionStrings:Default=sqlite:///dev.db
"""

import json
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from dbcontext_factory.config import ConfigurationResolver
from dbcontext_factory.exception import DbContextFactoryException

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
    )

    arguments = sys.argv[1:] if argv is None else argv
    try:
        configuration = ConfigurationResolver().resolve(arguments)
    except DbContextFactoryException as e:
        logger.error("%s (%s)", e.message, e.code)
        return 1

    print(
        json.dumps(
            {
                "environment": configuration.environment_name,
                "sources": list(configuration.sources),
                "configuration": configuration.as_dict(),
            },
            indent=2,
            default=str,
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
