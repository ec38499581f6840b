# app.py

import argparse

from rich.console import Console
from rich.prompt import Prompt, IntPrompt
from rich.table import Table

from beaver.generator import generate_busy_beaver
from beaver.search import search_busy_beaver
from beaver.transition import State, UndefinedTransition
from beaver.turing_machine import parse_partial_machine
from config.config_loader import DEFAULT_CONFIG, load_config, validate_config
from logger.logger import JSONLogger

console = Console()

# === Utilities ===
def build_logger(config):
    if not config["save_results"]:
        return None
    return JSONLogger(config["output_directory"], config["log_file_prefix"])

def transition_table(machine):
    """Transition table of a (partial) machine in busy beaver notation."""
    table = Table(title=f"{machine.num_states}-state machine", show_header=True, header_style="bold magenta")
    table.add_column("State", justify="center")
    table.add_column("0", justify="center")
    table.add_column("1", justify="center")
    for idx, transition in enumerate(machine.transitions):
        row = str(transition).split(" ")
        table.add_row(State(idx + 1).letter, *row)
    return table

def describe_outcome(outcome, max_steps):
    if isinstance(outcome, UndefinedTransition):
        return f"[yellow]Stuck on undefined transition ({outcome.state.letter}, {outcome.symbol})[/yellow]"
    if outcome is None:
        return f"[red]Did not halt within {max_steps:,} steps[/red]"
    return f"[green]Halted with {outcome:,} ones on the tape[/green]"

def show_main_menu():
    console.print("\n[bold cyan]Busy Beaver Candidate Generator[/bold cyan]")
    console.print("[1] Generate a candidate")
    console.print("[2] Search best of several candidates")
    console.print("[3] Inspect a machine")
    console.print("[4] Exit")


def handle_generate(config, seed=None):
    states = config["state_size"]
    max_steps = config["max_steps"]
    console.print(f"[cyan]Generating a {states}-state candidate (max {max_steps:,} steps)...[/cyan]")

    machine = generate_busy_beaver(states, max_steps, rng=seed, logger=build_logger(config))
    result = machine.execute(max_steps)

    console.print(str(machine))
    console.print(transition_table(machine))
    console.print(describe_outcome(result.productivity if result.halted else None, max_steps))
    if result.halted:
        console.print(f"Steps: {result.steps:,}")
    return machine


def handle_search(config, seed=None):
    states = config["state_size"]
    max_steps = config["max_steps"]
    attempts = config["attempts"]
    console.print(f"[cyan]Searching {attempts} candidates with {states} states...[/cyan]")

    result = search_busy_beaver(states, max_steps, attempts=attempts, seed=seed, logger=build_logger(config))

    console.print(str(result.machine))
    console.print(transition_table(result.machine))
    console.print(describe_outcome(result.productivity, max_steps))
    if result.halted:
        console.print(f"Steps: {result.steps:,}")
    return result


def handle_inspect(text, max_steps):
    try:
        machine = parse_partial_machine(text)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return None

    outcome = machine.run(max_steps)
    console.print(transition_table(machine))
    console.print(describe_outcome(outcome, max_steps))
    return outcome


def interactive_main(config, seed=None):
    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4"], default="4")

        if choice in ("1", "2"):
            config["state_size"] = IntPrompt.ask("Number of States", default=config["state_size"])
            config["max_steps"] = IntPrompt.ask("Max Steps", default=config["max_steps"])
            try:
                validate_config(config)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                continue
            if choice == "1":
                handle_generate(config, seed)
            else:
                config["attempts"] = IntPrompt.ask("Attempts", default=config["attempts"])
                handle_search(config, seed)
        elif choice == "3":
            text = Prompt.ask("Machine (e.g. 1RB 1LB 1LA ---)")
            handle_inspect(text, config["max_steps"])
        elif choice == "4":
            console.print("[bold green]Goodbye![/bold green]")
            break

def main(argv=None):
    parser = argparse.ArgumentParser(description="Busy Beaver Candidate Generator")
    parser.add_argument("--config", help="Path to a runtime config JSON file")
    parser.add_argument("--generate", action="store_true", help="Generate one candidate immediately")
    parser.add_argument("--search", action="store_true", help="Keep the best of several candidates")
    parser.add_argument("--inspect", metavar="MACHINE", help="Run a machine given in text form, e.g. '1RB 1LB 1LA 1RH'")
    parser.add_argument("--states", type=int, help="Number of machine states (2-7)")
    parser.add_argument("--max-steps", type=int, help="Step budget per run")
    parser.add_argument("--attempts", type=int, help="Candidates generated by --search")
    parser.add_argument("--seed", type=int, help="Seed for reproducible candidates")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else DEFAULT_CONFIG.copy()
    if args.states is not None:
        config["state_size"] = args.states
    if args.max_steps is not None:
        config["max_steps"] = args.max_steps
    if args.attempts is not None:
        config["attempts"] = args.attempts
    seed = args.seed if args.seed is not None else config["seed"]

    try:
        validate_config(config)
    except (ValueError, TypeError) as e:
        parser.error(str(e))

    if args.inspect:
        handle_inspect(args.inspect, config["max_steps"])
    elif args.generate:
        handle_generate(config, seed)
    elif args.search:
        handle_search(config, seed)
    else:
        interactive_main(config, seed)

if __name__ == "__main__":
    main()
