"""Run clustergate as ``python -m clustergate``."""

from clustergate.cli.main import main

if __name__ == "__main__":
    main()
