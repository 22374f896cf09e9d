from pathlib import Path

import yaml

from episodemerge.cli.merge_episodes import main


def _write_resources(path: Path) -> None:
    path.write_text(
        yaml.safe_dump([
            {"directory": "gen/a", "includes": ["META-INF/sun-jaxb.episode"]},
            {"directory": "src/main/resources"},
        ]),
        encoding="utf-8",
    )


def test_cli_merges_and_rewrites_resources(write_episode, build_dir: Path, tmp_path: Path) -> None:
    write_episode("target/mod-a/META-INF/sun-jaxb.episode")
    write_episode("target/mod-b/META-INF/sun-jaxb.episode")
    res_file = tmp_path / "resources.yml"
    _write_resources(res_file)

    rc = main(["--build-dir", str(build_dir), "--resources", str(res_file), "-v"])

    assert rc == 0
    merged = build_dir / "merged-jaxb-episode" / "sun-jaxb.episode"
    assert merged.exists()
    resources = yaml.safe_load(res_file.read_text(encoding="utf-8"))
    assert [r["directory"] for r in resources] == ["src/main/resources", str(merged.parent.resolve())]
    assert resources[0]["excludes"] == ["META-INF/sun-jaxb.episode"]


def test_cli_no_op_leaves_resources_alone(write_episode, build_dir: Path, tmp_path: Path) -> None:
    write_episode("target/mod-a/META-INF/sun-jaxb.episode")
    res_file = tmp_path / "resources.yml"
    _write_resources(res_file)
    before = res_file.read_text(encoding="utf-8")

    rc = main(["--build-dir", str(build_dir), "--resources", str(res_file)])

    assert rc == 0
    assert res_file.read_text(encoding="utf-8") == before
    assert not (build_dir / "merged-jaxb-episode").exists()


def test_cli_config_file_and_legacy_flag(write_episode, build_dir: Path, tmp_path: Path) -> None:
    write_episode("target/gen/a/sun-jaxb.episode")
    write_episode("target/gen/b/sun-jaxb.episode")
    write_episode("target/other/c/sun-jaxb.episode")
    cfg = tmp_path / "merge.yml"
    cfg.write_text(yaml.safe_dump({"buildDirectory": str(build_dir), "episodeFiles": ["gen/**/sun-jaxb.episode"]}),
                   encoding="utf-8")

    rc = main(["--config", str(cfg), "--legacy-namespace", "--strategy", "line-splice"])

    assert rc == 0
    text = (build_dir / "merged-jaxb-episode" / "sun-jaxb.episode").read_text(encoding="utf-8")
    assert 'xmlns="http://java.sun.com/xml/ns/jaxb"' in text
    assert "gen/a/sun-jaxb.episode" in text
    assert "other/c" not in text


def test_cli_reports_errors_with_exit_code(write_episode, build_dir: Path, caplog) -> None:
    write_episode("target/a/sun-jaxb.episode", text="<not-bindings/>\n")
    write_episode("target/b/sun-jaxb.episode")

    rc = main(["--build-dir", str(build_dir)])

    assert rc == 1
    assert "does not seem to be a JAXB binding file" in caplog.text


def test_cli_requires_a_directory(caplog) -> None:
    assert main([]) == 1
    assert "No baseDirectory specified!" in caplog.text


def test_cli_lenient_layout_and_exclude(write_episode, build_dir: Path) -> None:
    text = ('<?xml version="1.0"?><bindings xmlns="http://java.sun.com/xml/ns/jaxb" version="2.1">\n'
            '  <schemaBindings map="false"/>\n'
            '  <schemaBindings map="true"/>\n'
            "</bindings>\n")
    write_episode("target/a/sun-jaxb.episode", text=text)
    write_episode("target/b/sun-jaxb.episode", text=text)
    write_episode("target/skipped/sun-jaxb.episode", text="<broken\n")

    rc = main(["--build-dir", str(build_dir), "--lenient-layout", "--exclude", "skipped/**"])

    assert rc == 0
    merged = (build_dir / "merged-jaxb-episode" / "sun-jaxb.episode").read_text(encoding="utf-8")
    assert 'map="false"' not in merged
    assert merged.count('map="true"') == 2
    assert "skipped" not in merged


def test_cli_negated_flags_override_config(write_episode, build_dir: Path, tmp_path: Path, caplog) -> None:
    caplog.set_level("INFO")
    write_episode("target/mod-a/META-INF/sun-jaxb.episode")
    write_episode("target/mod-b/META-INF/sun-jaxb.episode")
    cfg = tmp_path / "merge.yml"
    cfg.write_text(
        yaml.safe_dump({
            "buildDirectory": str(build_dir),
            "useJakartaNamespace": False,
            "strictLayout": False,
            "verbose": True,
        }),
        encoding="utf-8",
    )

    rc = main(["--config", str(cfg), "--no-legacy-namespace", "--no-lenient-layout", "--no-verbose"])

    assert rc == 0
    text = (build_dir / "merged-jaxb-episode" / "sun-jaxb.episode").read_text(encoding="utf-8")
    assert 'xmlns="https://jakarta.ee/xml/ns/jaxb"' in text
    assert "Using merge strategy" not in caplog.text


def test_cli_unset_flags_keep_config_values(write_episode, build_dir: Path, tmp_path: Path) -> None:
    write_episode("target/mod-a/META-INF/sun-jaxb.episode")
    write_episode("target/mod-b/META-INF/sun-jaxb.episode")
    cfg = tmp_path / "merge.yml"
    cfg.write_text(yaml.safe_dump({"buildDirectory": str(build_dir), "useJakartaNamespace": False}), encoding="utf-8")

    assert main(["--config", str(cfg)]) == 0

    text = (build_dir / "merged-jaxb-episode" / "sun-jaxb.episode").read_text(encoding="utf-8")
    assert 'xmlns="http://java.sun.com/xml/ns/jaxb"' in text
