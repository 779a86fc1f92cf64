#!/usr/bin/env python3
import argparse
import sys

from boxlib import box_errors
from boxlib import box_settings
from boxlib import commit_times
from boxlib import console_log
from boxlib import gist_publisher
from boxlib import graphql_client
from boxlib import report


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(
		description="Publish your commit time-of-day distribution to a GitHub gist."
	)
	parser.add_argument(
		"--settings",
		default="settings.yaml",
		help="YAML settings path; GH_TOKEN, GIST_ID and TIMEZONE env vars override it.",
	)
	parser.add_argument(
		"--timezone",
		default="",
		help="IANA timezone for bucketing commit hours (defaults to TIMEZONE then UTC).",
	)
	parser.add_argument(
		"--dry-run",
		action="store_true",
		help="Print the report instead of updating the gist.",
	)
	args = parser.parse_args(argv)
	return args


#============================================
def run(args: argparse.Namespace, environ=None) -> list[str]:
	"""
	Run the fetch, bucket, render, and publish steps. Returns the report lines.
	"""
	settings, settings_path = box_settings.load_settings(args.settings)
	console_log.log_step(f"Using settings file: {settings_path}")
	config = box_settings.resolve_box_settings(
		settings,
		environ=environ,
		timezone_override=args.timezone,
		require_gist=not args.dry_run,
	)

	client = graphql_client.GraphQLClient(config.github_token, log_fn=console_log.log_step)
	analyzer = commit_times.CommitTimeAnalyzer(
		client,
		timezone_name=config.timezone_name,
		log_fn=console_log.log_step,
		warn_fn=console_log.log_warning,
	)
	login, author_id = analyzer.fetch_identity()
	repositories = analyzer.fetch_contributed_repositories(login)
	if not repositories:
		raise box_errors.RepositoryListError("No contributed repositories found")
	counts = analyzer.analyze(author_id, repositories)
	lines = report.generate_report_lines(counts, log_fn=console_log.log_step)
	usage = client.api_usage_snapshot()
	console_log.log_step(f"GitHub API usage: calls={usage.get('api_call_count', 0)}")

	if args.dry_run:
		console_log.log_step("Dry run: skipping gist update.")
		console_log.print_report(lines)
		return lines
	publisher = gist_publisher.GistPublisher(
		config.github_token,
		config.gist_id,
		log_fn=console_log.log_step,
	)
	publisher.publish(lines)
	return lines


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Entry point; exits non-zero on any unrecovered failure.
	"""
	args = parse_args(argv)
	console_log.log_step("Starting productive-box")
	try:
		run(args)
	except RuntimeError as error:
		console_log.log_error(str(error))
		sys.exit(1)
	console_log.log_step("All done!")


if __name__ == "__main__":
	main()
