# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import re
import webbrowser
from typing import Callable

from clusterctl._banner import print_banner
from clusterctl._session import ClusterSession
from clusterctl._session import cluster_elbs_url
from clusterctl._terraform import TerraformProject
from runbook import Anything
from runbook import Executed
from runbook import ExitCodeIn
from runbook import Runbook
from runbook import SuccessWithOutput
from runbook import UserAbort

_logger = logging.getLogger(__name__)

# Template dirs are rendered locally; their state breaks the destroy plan
# when the rendered files are missing on this machine.
_template_dir_state = [
    'module.tectonic-aws.module.bootkube.template_dir.bootkube',
    'module.tectonic-aws.module.tectonic.template_dir.tectonic',
    'module.tectonic-aws.module.bootkube.template_dir.bootkube_bootstrap',
    ]

_plan_exit_codes = ExitCodeIn(0, 2)


def destroy_cluster(runbook: Runbook, session: ClusterSession):
    print_banner(f"destroying cluster {session.cluster_id}")
    if not runbook.ask("Do you want to proceed?"):
        return
    config = session.config
    tectonic = TerraformProject(
        config.terraforming_path / 'projects/kubernetes-tectonic',
        session.aws_env(config.infra_profile),
        )
    print("\nWe will now prepare a -destroy plan against terraforming/projects/kubernetes-tectonic")
    print("First, we must select the right workspace")
    runbook.run("Select workspace?", tectonic.workspace_select(session.cluster_id))
    print("\nNext, we can optionally remove state that sometimes causes problems")
    runbook.run("Remove template dirs from state?", tectonic.state_rm(*_template_dir_state))
    print("\nNext, we actually plan")
    # Exit status is 2 even if the plan shows no diff, e.g. if the cluster does not exist.
    outcome = runbook.run("Plan destroy?", tectonic.plan_destroy(session.tfvars()), _plan_exit_codes)
    if isinstance(outcome, Executed) and not outcome.matched:
        print("You probably need to re-run this tool and remove problematic bootkube/tectonic state.")
    print("\nThe plan we just ran should show approximately 120 resources to delete.")
    print("Unfortunately, the output of the plan does not contain the cluster id")
    print("so we must double check the workspace we are on!\n")
    this_workspace = SuccessWithOutput(rf'^{re.escape(session.cluster_id)}$')
    outcome = runbook.run("Show workspace?", tectonic.workspace_show().capturing_stdout(), this_workspace)
    if isinstance(outcome, Executed):
        print(f"\nWorkspace: {outcome.result.output_text().strip()}")
    if not runbook.ask("Are we on the right workspace?"):
        raise UserAbort("Wrong workspace")
    print("\nWe are ready to destroy the cluster. THERE IS NO GOING BACK")
    outcome = runbook.run("Destroy the cluster?", tectonic.apply(), Anything())
    if isinstance(outcome, Executed) and not outcome.result.succeeded():
        print("\nterraform apply encountered an error, but this is expected.")
    print("\nWe will now create another -destroy plan to ensure all resources are cleaned up")
    print("This plan should show no diff")
    runbook.run("Plan destroy again?", tectonic.plan_destroy(session.tfvars()), _plan_exit_codes)
    print(f"\nCluster destroy complete. DNS and ELBs associated with {session.cluster_id} may still be up")
    if runbook.ask("Do you want to move on to destroying DNS and ELBs?"):
        destroy_kubernetes_ingress(runbook, session)


def destroy_kubernetes_ingress(
        runbook: Runbook,
        session: ClusterSession,
        open_url: Callable[[str], object] = webbrowser.open,
        ):
    config = session.config
    ingress = TerraformProject(
        config.terraforming_path / 'projects/kubernetes-ingress',
        session.aws_env(config.v1_profile),
        )
    print("\nWe will now step through destroying the kubernetes-ingress project")
    print("First, we must select the right workspace")
    runbook.run("Select workspace?", ingress.workspace_select(session.cluster_id))
    print("\nWe will now prepare a -destroy plan against terraforming/projects/kubernetes-ingress")
    runbook.run("Plan destroy?", ingress.plan_destroy(session.tfvars()), _plan_exit_codes)
    print(f"\nWe are ready to apply. This will DESTROY DNS routes that point to {session.cluster_id}")
    runbook.run("Destroy DNS records?", ingress.apply())
    print("\nWe have removed the DNS records!")
    url = cluster_elbs_url(session.cluster_id)
    print(f"""
A manual step is required in the AWS web console.
There will be 3 ELBs created by Kubernetes that will be left running.

The following URL will show all ELBs related to cluster id {session.cluster_id}

{url}

INSPECT EACH ONE CAREFULLY BEFORE YOU DELETE IT. There should be 0 live instances
associated with the ELBs you delete.
""")
    if runbook.ask("Open this url in your browser? (remember to use the infra profile)"):
        _logger.info("Open %s", url)
        open_url(url)
