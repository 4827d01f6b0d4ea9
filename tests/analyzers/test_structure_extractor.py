"""Tests for the regex structure extractor."""

from __future__ import annotations

import textwrap

from ngcontext.analyzers.structure import (
    UNKNOWN_SELECTOR,
    extract,
    extract_component_name,
    extract_component_refs,
    extract_dependencies,
    extract_exports,
    extract_for_kind,
    extract_imports,
    extract_interfaces,
    extract_methods,
    extract_selector,
)
from ngcontext.models import FileStructureSummary

COMPONENT_SOURCE = textwrap.dedent(
    """
    import { Component, Input, inject } from '@angular/core';
    import * as utils from '../utils';
    import dayjs from 'dayjs';
    import { ButtonComponent } from '../ui/button/button.component';
    import { Component } from '@angular/core';

    export interface DashboardStat {
      label: string;
    }

    export type StatKind = 'count' | 'ratio';

    @Component({
      selector: 'app-dashboard',
      standalone: true,
      imports: [
        CommonModule,
        ButtonComponent,
        HighlightDirective,
        DatePipe,
      ],
      templateUrl: './dashboard.component.html',
    })
    export class DashboardComponent {
      private readonly theme = inject(ThemeService);

      constructor(private api: ApiClient, private notes: NoteService) {}

      ngOnInit(): void {
        this.load();
      }

      public load(): void {
        console.log('loading');
      }

      get total(): number {
        return 1;
      }
    }

    export { DashboardStat as Stat, helper };
    """
)


def test_extract_imports_covers_named_namespace_and_default() -> None:
    imports = extract_imports(COMPONENT_SOURCE)

    assert imports == ["Component", "Input", "inject", "utils", "dayjs", "ButtonComponent"]


def test_extract_exports_includes_declarations_and_lists() -> None:
    exports = extract_exports(COMPONENT_SOURCE)

    assert exports[:3] == ["DashboardStat", "StatKind", "DashboardComponent"]
    assert "DashboardStat as Stat" in exports
    assert "helper" in exports


def test_extract_interfaces_includes_type_aliases() -> None:
    assert extract_interfaces(COMPONENT_SOURCE) == ["DashboardStat", "StatKind"]


def test_extract_interfaces_accepts_unexported_declarations() -> None:
    text = "interface Local { a: number }\ntype Alias = string;\n"

    assert extract_interfaces(text) == ["Local", "Alias"]


def test_extract_methods_skips_lifecycle_and_constructor() -> None:
    methods = extract_methods(COMPONENT_SOURCE)

    assert "load" in methods
    assert "total" in methods
    assert "ngOnInit" not in methods
    assert "constructor" not in methods


def test_extract_dependencies_combines_imports_inject_and_constructor() -> None:
    dependencies = extract_dependencies(COMPONENT_SOURCE)

    assert dependencies == [
        "ButtonComponent",
        "HighlightDirective",
        "DatePipe",
        "ThemeService",
        "ApiClient",
        "NoteService",
    ]


def test_extract_component_refs_unions_tags_and_types() -> None:
    template = '<app-header></app-header>\n<app-stats-card [value]="1" />\n'
    script = "const x: ButtonComponent = null;"

    assert extract_component_refs(template) == ["app-header", "app-stats-card"]
    assert extract_component_refs(template + script) == [
        "app-header",
        "app-stats-card",
        "ButtonComponent",
    ]


def test_selector_and_component_name() -> None:
    assert extract_selector(COMPONENT_SOURCE) == "app-dashboard"
    assert extract_selector("export class X {}") == UNKNOWN_SELECTOR
    assert extract_selector("selector: `app-tick`") == "app-tick"
    assert extract_component_name(COMPONENT_SOURCE) == "DashboardComponent"
    assert extract_component_name("export class Helper {}") is None


def test_extract_is_pure() -> None:
    assert extract(COMPONENT_SOURCE) == extract(COMPONENT_SOURCE)


def test_non_matching_text_yields_empty_summary() -> None:
    summary = extract("just some prose without code")

    assert summary == FileStructureSummary()
    assert summary.is_empty()


def test_extract_for_kind_dispatch() -> None:
    template = extract_for_kind('<app-button label="x"></app-button>', "template")
    interface_file = extract_for_kind(COMPONENT_SOURCE, "interface")
    unknown = extract_for_kind(COMPONENT_SOURCE, "stylesheet")

    assert template.component_refs == ["app-button"]
    assert template.imports == []
    assert interface_file.interfaces == ["DashboardStat", "StatKind"]
    assert interface_file.methods == []
    assert interface_file.imports
    assert unknown.is_empty()
    assert extract_for_kind(COMPONENT_SOURCE, "component") == extract(COMPONENT_SOURCE)
