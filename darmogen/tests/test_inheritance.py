BASE = """
export abstract class Base {
  @PrimaryGeneratedColumn() id: string;
  @CreateDateColumn() createdAt: Date;
}
"""

AUDITED = """
import { Base } from 'src/common/base';

export abstract class Audited extends Base {
  @Column() updatedBy: string;
}
"""

USER = """
import { Audited } from './common/audited';

@Entity()
export class User extends Audited {
  @Column() name: string;
}
"""


def load_class(parser, src_dir, relative, name):
    source = parser.cache.import_source(str(src_dir / relative))
    return source.elements[name]


def test_cross_file_chain(make_parser, src_dir):
    parser = make_parser(
        {
            "common/base.ts": BASE,
            "common/audited.ts": AUDITED,
            "user.entity.ts": USER,
        }
    )
    user = load_class(parser, src_dir, "user.entity.ts", "User")

    ancestors = parser.inheritance.resolve_ancestors(user)

    assert [ancestor.name for ancestor in ancestors] == ["Audited", "Base"]
    assert ancestors[1].source_path == str(src_dir / "common" / "base.ts")


def test_same_file_ancestor(make_parser, src_dir):
    parser = make_parser(
        {
            "user.entity.ts": """
abstract class Named {
  @Column() name: string;
}

@Entity()
export class User extends Named {}
""",
        }
    )
    user = load_class(parser, src_dir, "user.entity.ts", "User")

    assert [ancestor.name for ancestor in parser.inheritance.resolve_ancestors(user)] == ["Named"]


def test_unresolvable_ancestors_are_skipped(make_parser, src_dir):
    parser = make_parser(
        {
            "user.entity.ts": """
import { BaseEntity } from 'typeorm';
import { Missing } from './missing';

@Entity()
export class User extends BaseEntity implements Missing, Unknown {}
""",
        }
    )
    user = load_class(parser, src_dir, "user.entity.ts", "User")

    assert parser.inheritance.resolve_ancestors(user) == []


def test_cycle_terminates(make_parser, src_dir):
    parser = make_parser(
        {
            "a.entity.ts": """
import { B } from './b';

@Entity()
export class A extends B {
  @Column() a: string;
}
""",
            "b.ts": """
import { C } from './c';

export class B extends C {
  @Column() b: string;
}
""",
            "c.ts": """
import { A } from './a.entity';

export class C extends A {
  @Column() c: string;
}
""",
        }
    )
    a = load_class(parser, src_dir, "a.entity.ts", "A")

    assert [ancestor.name for ancestor in parser.inheritance.resolve_ancestors(a)] == ["B", "C"]

    result = parser.parse()
    assert [field.name for field in result.entities[0].model.fields] == ["a", "b", "c"]


def test_find_class_prefers_import_table(make_parser, src_dir):
    parser = make_parser(
        {
            "common/base.ts": BASE,
            "user.entity.ts": """
import { Base } from './common/base';

class Base {}

@Entity()
export class User extends Base {}
""",
        }
    )
    user = load_class(parser, src_dir, "user.entity.ts", "User")

    base = parser.inheritance.find_class(user, "Base")

    assert base.source_path == str(src_dir / "common" / "base.ts")
