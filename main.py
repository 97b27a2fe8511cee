import argparse
import logging

import aitrl
from aitrl import utils
from aitrl.prj_logger import ProjectLogger
from aitrl.components.workflow import AssessmentWorkflow, FLOWS


def parse_args():
    parser = argparse.ArgumentParser(description="Run a structured assessment flow over a set of documents.")
    parser.add_argument("input_file", help="CSV/Excel file with one document per row, or a .txt/.md document")
    parser.add_argument("--flow", choices=sorted(FLOWS), default="trl", help="Assessment flow to run")
    parser.add_argument("--config", default="config.yaml", help="Path to the YAML config file")
    parser.add_argument("--format", choices=["xlsx", "csv"], default="xlsx", help="Output file format")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to the console")
    return parser.parse_args()


if __name__ == "__main__":

    args = parse_args()
    config = utils.load_config(args.config)
    output_directory = utils.make_output_directory(config["FILE_LOCATIONS"], "OUTPUT_FOLDER")
    ProjectLogger(
        aitrl.BASE_LOGGERNAME,
        f"{output_directory}/{aitrl.BASE_LOGGERNAME}.log",
        level=logging.DEBUG if args.verbose else logging.INFO
    ).config()

    wf = AssessmentWorkflow(config=config, flow=args.flow)
    wf.load_documents(args.input_file)
    wf.run()
    wf.save_output(fmt=args.format, output_folder=output_directory)
