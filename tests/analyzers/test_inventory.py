"""Tests for the component and service inventory."""

from __future__ import annotations

from ngcontext.analyzers.inventory import (
    component_features,
    component_type,
    find_components,
    find_services,
    service_category,
    service_dependencies,
)
from tests._fixtures.project_builder import ProjectBuilder

BUTTON_COMPONENT = """
    import { Component, Input, signal } from '@angular/core';

    @Component({
      selector: 'app-button',
      standalone: true,
      template: '<button [attr.aria-label]="label">{{ label }}</button>',
    })
    export class ButtonComponent {
      @Input() label = '';
      readonly pressed = signal(false);
    }
"""

STORAGE_SERVICE = """
    import { Injectable, inject } from '@angular/core';
    import { BehaviorSubject } from 'rxjs';
    import { LoggerService } from './logger.service';

    @Injectable({ providedIn: 'root' })
    export class StorageService {
      private readonly logger = inject(LoggerService);
      readonly items = new BehaviorSubject<string[]>([]);
    }
"""


def test_find_components_reports_type_and_features(project: ProjectBuilder) -> None:
    project.write(
        {
            "src/app/shared/components/ui/button/button.component.ts": BUTTON_COMPONENT,
            "src/app/app.component.ts": "export class AppComponent implements OnInit {}\n",
            "src/app/app.component.html": "<app-button></app-button>\n",
        }
    )

    components = find_components(project.root / "src", project.root)

    assert [c.name for c in components] == ["app", "button"]
    app, button = components
    assert app.type == "Root Component"
    assert app.features == ["Lifecycle"]
    assert button.path == "src/app/shared/components/ui/button/button.component.ts"
    assert button.type == "UI Component"
    assert button.features == ["Standalone", "Signals", "Inputs", "Accessibility"]
    assert button.size_kb > 0


def test_find_services_reports_category_patterns_and_dependencies(project: ProjectBuilder) -> None:
    project.write(
        {
            "src/app/core/storage/storage.service.ts": STORAGE_SERVICE,
            "src/app/shared/services/format.service.ts": "export class FormatService {}\n",
        }
    )

    services = find_services(project.root / "src", project.root)

    assert [s.name for s in services] == ["storage", "format"]
    storage, format_service = services
    assert storage.category == "data"
    assert storage.patterns == ["Injectable", "Reactive", "Modern DI", "Singleton"]
    assert storage.dependencies == ["Angular Core", "RxJS", "Local Service"]
    assert format_service.category == "utility"
    assert format_service.patterns == []


def test_inventory_skips_excluded_directories(project: ProjectBuilder) -> None:
    project.write(
        {
            "src/app/app.component.ts": "export class AppComponent {}\n",
            "src/node_modules/lib/lib.component.ts": "export class LibComponent {}\n",
            "src/dist/app.component.ts": "export class AppComponent {}\n",
        }
    )

    components = find_components(project.root / "src", project.root)

    assert [c.path for c in components] == ["src/app/app.component.ts"]


def test_rule_helpers() -> None:
    assert component_type("src/app/layout/header/header.component.ts") == "Layout Component"
    assert component_type("src/app/features/a/a.component.ts") == "Feature Component"
    assert component_type("src/app/misc/a.component.ts") == "Component"
    assert component_features("const a = computed(() => 1);") == ["Computed"]
    assert service_category("src/app/core/services/api.service.ts") == "core"
    assert service_category("src/app/api.service.ts") == "utility"
    assert service_dependencies("const x = 1;") == []
