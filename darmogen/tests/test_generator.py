import os

import pytest

from darmogen.pipeline import ConfigurationError, DartModelGenerator, EmissionError, OutputValidationError
from darmogen.pipeline.resolver import EntityModel, Field, SourceEntity, TypeDescriptor, TypeKind
from darmogen.pipeline.writer import AtomicWriter

SOURCES = {
    "users/user.entity.ts": """
import { Post } from 'src/posts/post.entity';

@Entity()
export class User {
  @PrimaryGeneratedColumn() id: string;
  @Column() name: string;
  @OneToMany(() => Post, (post) => post.author) posts: Post[];
}
""",
    "posts/post.entity.ts": """
import { User } from 'src/users/user.entity';

@Entity()
export class Post {
  @Column() title: string;
  @ManyToOne(() => User) author: User;
}
""",
}


def source_entity(name, path="models.entity.ts"):
    field = Field(name="label", type=TypeDescriptor(kind=TypeKind.PRIMITIVE, name="String"), declared_in=name)
    return SourceEntity(path=path, name=name, model=EntityModel(name=name, fields=[field]))


def test_target_file(generator_config, tmp_path):
    generator = DartModelGenerator(generator_config)
    entity = source_entity("BlogPost", "blog/posts/blog-post.entity.ts")

    assert generator.target_file(entity) == str(tmp_path / "models" / "blog" / "posts" / "blog-post.model.dart")


def test_default_filename_format(generator_config, tmp_path):
    generator_config.formatters.filename = None
    generator = DartModelGenerator(generator_config)

    assert generator.target_file(source_entity("BlogPost")) == str(tmp_path / "models" / "blog-post.dart")


def test_invalid_formatter(generator_config):
    generator_config.formatters.filename = "shouting"
    with pytest.raises(ConfigurationError):
        DartModelGenerator(generator_config)


def test_invalid_name_formatter(generator_config):
    generator_config.formatters.name = "shouting"
    with pytest.raises(ConfigurationError):
        DartModelGenerator(generator_config)


def test_generate_writes_every_model(make_parser, generator_config, tmp_path):
    parsed = make_parser(SOURCES).parse()
    result = DartModelGenerator(generator_config).generate(parsed.entities)

    assert result.errors == []
    assert [entity.name for entity in result.written] == ["Post", "User"]

    user_file = tmp_path / "models" / "users" / "user.model.dart"
    post_file = tmp_path / "models" / "posts" / "post.model.dart"
    user_source = user_file.read_text()
    post_source = post_file.read_text()

    assert user_source.startswith("import '../posts/post.model.dart';\n\nclass User extends Model {\n")
    assert post_source.startswith("import '../users/user.model.dart';\n\nclass Post extends Model {\n")
    assert "this.id" not in user_source
    assert "  List<Post> posts;" in user_source
    assert "  User author;" in post_source


def test_generate_is_deterministic(make_parser, generator_config, tmp_path):
    parser = make_parser(SOURCES)

    DartModelGenerator(generator_config).generate(parser.parse().entities)
    first = {path: path.read_bytes() for path in (tmp_path / "models").rglob("*.dart")}

    parser = make_parser({})
    DartModelGenerator(generator_config).generate(parser.parse().entities)
    second = {path: path.read_bytes() for path in (tmp_path / "models").rglob("*.dart")}

    assert first == second
    assert len(first) == 2


def test_failed_write_is_isolated(generator_config, tmp_path):
    # A file where a directory is expected makes the second entity unwritable
    (tmp_path / "models").mkdir()
    (tmp_path / "models" / "broken").write_text("")
    entities = [source_entity("Good", "good.entity.ts"), source_entity("Bad", "broken/bad.entity.ts")]

    result = DartModelGenerator(generator_config).generate(entities)

    assert [entity.name for entity in result.written] == ["Good"]
    assert len(result.errors) == 1
    error = result.errors[0]
    assert isinstance(error, EmissionError)
    assert error.entity_name == "Bad"
    assert error.target_file == str(tmp_path / "models" / "broken" / "bad.model.dart")
    assert (tmp_path / "models" / "good.model.dart").exists()


def test_failed_rendering_is_isolated(generator_config, tmp_path):
    def name_formatter(name):
        if name == "Bad":
            raise ValueError("no class name for Bad")
        return name

    generator_config.formatters.name = name_formatter
    entities = [source_entity("Good", "good.entity.ts"), source_entity("Bad", "bad.entity.ts")]

    result = DartModelGenerator(generator_config).generate(entities)

    assert [entity.name for entity in result.written] == ["Good"]
    assert len(result.errors) == 1
    assert result.errors[0].entity_name == "Bad"
    assert result.errors[0].reason == "no class name for Bad"
    assert (tmp_path / "models" / "good.model.dart").exists()
    assert not (tmp_path / "models" / "bad.model.dart").exists()


def test_invalid_output_is_not_written(generator_config, tmp_path):
    def reject(content):
        raise OutputValidationError("rejected")

    generator = DartModelGenerator(generator_config, writer=AtomicWriter(validate=reject))
    result = generator.generate([source_entity("Tag", "tag.entity.ts")])

    assert result.written == []
    assert "rejected" in str(result.errors[0])
    assert not os.path.exists(tmp_path / "models" / "tag.model.dart")


def test_progress_events(generator_config):
    events = []

    class Recorder:
        def on_start(self, total, items):
            events.append(("start", total, items))

        def on_progress(self, loaded, name):
            events.append(("progress", loaded))

    entities = [source_entity(name, f"{name.lower()}.entity.ts") for name in ("A", "B", "C")]
    DartModelGenerator(generator_config, progress=Recorder()).generate(entities)

    assert events[0] == ("start", 3, ["A", "B", "C"])
    assert [event[1] for event in events[1:]] == [1, 2, 3]
