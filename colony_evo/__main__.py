"""Run the example gene-sum game: python -m colony_evo"""

from colony_evo.services.controller import run_controller

if __name__ == "__main__":
    run_controller()
