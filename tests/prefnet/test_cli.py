from prefnet.cli import build_parser, main
from prefnet.formats import load_specification, read_examples_csv


def test_parser_defaults():
    args = build_parser().parse_args(["learn", "ex.csv"])
    assert args.bound == 2
    assert args.parent_pool == "added"
    assert args.match_on == "optimum"
    args = build_parser().parse_args(["experiment", "--counts", "5,10", "--distributions", "biased"])
    assert args.counts == (5, 10)
    assert args.distributions == ("biased",)


def test_generate_sample_learn_compare(tmp_path):
    net = tmp_path / "truth.xml"
    examples = tmp_path / "examples.csv"
    learned = tmp_path / "learned.xml"

    assert main(["random-net", "--vars", "4", "--seed", "1", "-o", str(net)]) == 0
    assert main(["show", str(net)]) == 0
    assert main(["sample", str(net), "-n", "30", "--seed", "1", "-o", str(examples)]) == 0
    assert len(read_examples_csv(examples)) > 0

    assert main(["learn", str(examples), "--bound", "2", "-o", str(learned)]) == 0
    assert load_specification(learned).variables == load_specification(net).variables

    assert main(["entailments", str(net), "--list"]) == 0
    assert main(["compare", str(net), str(learned)]) == 0


def test_learning_failure_exit_code(tmp_path):
    examples = tmp_path / "examples.csv"
    examples.write_text(
        'condition,optimum\n,"A=T,B=T"\n"A=F","A=F,B=F"\n"A=T","A=T,B=F"\n',
        encoding="utf-8",
    )
    assert main(["learn", str(examples), "--bound", "1"]) == 2


def test_errors_exit_with_status_one(tmp_path, capsys):
    assert main(["show", str(tmp_path / "missing.xml")]) == 1
    bad = tmp_path / "bad.xml"
    bad.write_text("<MENU/>", encoding="utf-8")
    assert main(["entailments", str(bad)]) == 1
    assert "error" in capsys.readouterr().out


def test_experiment_with_report_and_log_file(tmp_path):
    out = tmp_path / "exp.csv"
    report = tmp_path / "report.txt"
    log = tmp_path / "run.log"
    rc = main([
        "--log-level", "DEBUG", "--log-file", str(log),
        "experiment", "--trials", "1", "--vars", "3", "--counts", "5",
        "--seed", "0", "--out", str(out), "--report", str(report), "--quiet",
    ])
    assert rc == 0
    assert out.exists()
    text = report.read_text(encoding="utf-8")
    assert "prefnet experiments" in text
    assert "END OF REPORT" in text
    assert "num_trials = 1" in text
    assert "generated random net" in log.read_text(encoding="utf-8")
